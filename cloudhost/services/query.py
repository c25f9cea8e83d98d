"""
通用列表查询服务 (Generic List Query Service)

功能描述 (Description):
    所有列表接口共用同一套查询契约：按条件过滤、排序、分页，返回当前页记录和过滤后的总数。
    每种实体（主机、公共池、低效主机、主机指标、通道汇总、通道明细、变更记录）各有一个
    RecordQuery 子类，只声明自己的搜索字段、时间字段、等值过滤字段和默认排序。

    Every list endpoint shares one query contract: filter, sort and paginate, returning
    the current page plus the filtered total. Each entity type has a RecordQuery subclass
    that only declares its search fields, time field, equality filters and natural order.

查询规则 (Query Rules):
    1. 所有条件按 AND 组合；未提供或为空的条件不参与过滤，而不是"全部不匹配"
    2. 关键词搜索为不区分大小写的子串匹配，% 和 _ 按字面匹配
    3. 日期范围按自然日比较，两端均包含
    4. 字段为空（NULL）的记录在该条件上不匹配，不会报错
    5. 默认排除逻辑删除的主机以及关联到这些主机的记录，include_deleted=true 时包含
    6. 排序总以代理键兜底，保证翻页结果确定、无重复无遗漏
    7. 页码超出范围返回空列表，total 保持不变
    8. total 与当前页由同一条语句（窗口计数）返回，二者来自同一快照

联表 (Joins):
    指标、低效主机、通道明细和变更记录按 IP 左连接主机表，返回主机摘要 host 字段，
    由服务端完成关联，调用方无需自行拼接。
"""
import enum
from dataclasses import dataclass
from datetime import date
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Tuple, Type

from pydantic import BaseModel
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from cloudhost.core.exceptions import ValidationError
from cloudhost.models.enums import EnableStatus
from cloudhost.models.host import Host
from cloudhost.schemas.common import HostBrief, Page

LIKE_ESCAPE = "\\"


@dataclass
class ListParams:
    """列表查询参数 (List query parameters)"""
    page: int = 1
    page_size: int = 10
    search: Optional[str] = None
    start_time: Optional[date] = None
    end_time: Optional[date] = None
    sort_by: Optional[str] = None
    order: str = "asc"
    include_deleted: bool = False

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def like_pattern(term: str) -> str:
    """把搜索词转为 LIKE 子串模式，转义通配符 (Build a substring LIKE pattern with wildcards escaped)."""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def search_clause(term: Optional[str], columns: Sequence[Any]):
    """任一字段包含搜索词即匹配；空搜索词返回 None 表示不过滤。"""
    if not term or not columns:
        return None
    pattern = like_pattern(term)
    return or_(*(column.ilike(pattern, escape=LIKE_ESCAPE) for column in columns))


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, enum.Enum) else value


class RecordQuery:
    """
    单实体列表查询基类 (Single-entity list query base class)

    子类声明：
        model            ORM 模型
        schema           返回条目的 Pydantic 模型
        key_column       代理键，用于排序兜底
        search_columns   关键词搜索字段
        time_column      start_time/end_time 比较的日期字段
        filter_columns   等值过滤参数名 → 字段
        sort_columns     允许排序的参数名 → 字段
        join_host        是否按 IP 左连接主机表
    """
    model: ClassVar[Any]
    schema: ClassVar[Type[BaseModel]]
    key_column: ClassVar[Any]
    search_columns: ClassVar[Tuple[Any, ...]] = ()
    time_column: ClassVar[Any] = None
    filter_columns: ClassVar[Dict[str, Any]] = {}
    sort_columns: ClassVar[Dict[str, Any]] = {}
    join_host: ClassVar[bool] = True

    def __init__(self, db: AsyncSession):
        self.db = db

    # ── 可覆盖的钩子 (Overridable hooks) ─────────────────────────

    def natural_order(self) -> List[Any]:
        """默认排序：插入顺序 (Natural order: insertion order)."""
        return [self.key_column.asc()]

    def scope_conditions(self, params: ListParams, criteria: Dict[str, Any]) -> List[Any]:
        """实体固有的范围条件，如公共池只看可申请主机。"""
        conditions = []
        if not params.include_deleted and self.join_host:
            conditions.append(or_(Host.id.is_(None), Host.enable_status != int(EnableStatus.DELETED)))
        return conditions

    # ── 查询实现 (Query implementation) ──────────────────────────

    def ordering(self, params: ListParams) -> List[Any]:
        if not params.sort_by:
            return self.natural_order()
        column = self.sort_columns.get(params.sort_by)
        if column is None:
            raise ValidationError(
                f"不支持的排序字段 (Unsupported sort field): {params.sort_by}",
                detail="allowed: " + ", ".join(sorted(self.sort_columns)),
            )
        primary = column.desc() if params.order == "desc" else column.asc()
        return [primary, self.key_column.asc()]

    def conditions(self, params: ListParams, criteria: Dict[str, Any]) -> List[Any]:
        conditions = self.scope_conditions(params, criteria)

        clause = search_clause(params.search, self.search_columns)
        if clause is not None:
            conditions.append(clause)

        if self.time_column is not None:
            if params.start_time is not None:
                conditions.append(self.time_column >= params.start_time)
            if params.end_time is not None:
                conditions.append(self.time_column <= params.end_time)

        for name, value in criteria.items():
            if value is None or value == "":
                continue
            conditions.append(self.filter_columns[name] == _plain(value))
        return conditions

    def _select(self):
        if self.join_host:
            stmt = select(self.model, Host).outerjoin(Host, Host.ip == self.model.ip)
            count_stmt = select(func.count()).select_from(self.model).outerjoin(Host, Host.ip == self.model.ip)
        else:
            stmt = select(self.model)
            count_stmt = select(func.count()).select_from(self.model)
        return stmt, count_stmt

    def to_item(self, row) -> BaseModel:
        item = self.schema.model_validate(row[0])
        if self.join_host:
            host = row[1]
            item.host = HostBrief.model_validate(host) if host is not None else None
        return item

    async def list(self, params: ListParams, **criteria: Any) -> Page:
        """
        执行过滤+排序+分页查询 (Run the filter + sort + paginate query)

        Args:
            params: 通用分页/搜索/时间/排序参数
            **criteria: 等值过滤条件，键必须在 filter_columns 中声明

        Returns:
            Page: list 为当前页记录，total 为过滤后、分页前的总数
        """
        if params.page < 1 or params.page_size < 1:
            raise ValidationError("page 和 page_size 必须为正整数 (page and page_size must be positive)")
        unknown = set(criteria) - set(self.filter_columns)
        if unknown:
            raise ValidationError("不支持的过滤条件 (Unsupported filters)", detail=", ".join(sorted(unknown)))

        order_by = self.ordering(params)
        conditions = self.conditions(params, criteria)
        stmt, count_stmt = self._select()
        if conditions:
            stmt = stmt.where(*conditions)
            count_stmt = count_stmt.where(*conditions)

        # total 与当前页来自同一条语句，窗口计数在 LIMIT/OFFSET 之前求值
        # (Total and page come from one statement; the window count is evaluated before LIMIT/OFFSET)
        result = await self.db.execute(
            stmt.add_columns(func.count().over().label("total"))
            .order_by(*order_by)
            .offset(params.offset)
            .limit(params.page_size)
        )
        rows = result.all()
        if rows:
            total = rows[0].total
        elif params.offset == 0:
            total = 0
        else:
            # 页码越界时当前页为空，只需单独取总数
            total = (await self.db.execute(count_stmt)).scalar() or 0
        items: List[BaseModel] = [self.to_item(row) for row in rows]

        return Page[self.schema](list=items, total=total, page=params.page, page_size=params.page_size)
