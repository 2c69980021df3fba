"""动态参数解析结果的数据结构

三类结果：
- NodePropertyOption：选项列表中的一项（/options）
- NodeListSearchResult：资源定位器搜索结果（/resource-locator-results）
- ResourceMapperFields：资源映射器字段 schema（/resource-mapper-fields）

都是纯 JSON 结构，API 层原样返回。
"""

from typing import Any, NotRequired, TypedDict


class NodePropertyOption(TypedDict):
    name: str
    value: str | int | float | bool
    description: NotRequired[str]
    action: NotRequired[str]


class NodeListSearchItem(TypedDict):
    name: str
    value: str | int
    url: NotRequired[str]
    icon: NotRequired[str]


class NodeListSearchResult(TypedDict):
    results: list[NodeListSearchItem]
    paginationToken: NotRequired[Any]


class ResourceMapperField(TypedDict):
    id: str
    displayName: str
    required: bool
    defaultMatch: bool
    display: bool
    type: NotRequired[str]
    canBeUsedToMatch: NotRequired[bool]
    options: NotRequired[list[NodePropertyOption]]
    readOnly: NotRequired[bool]
    removed: NotRequired[bool]


class ResourceMapperFields(TypedDict):
    fields: list[ResourceMapperField]
    emptyFieldsNotice: NotRequired[str]
