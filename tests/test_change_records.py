"""变更记录测试：默认倒序、操作人与备注搜索、日期过滤、联表主机。"""
from datetime import date

import pytest
from httpx import AsyncClient

from conftest import make_host
from cloudhost.models.change_record import HostChangeRecord


def record(ip, day, operation=1, operator="管理员", remark="管理状态变更"):
    return HostChangeRecord(
        ip=ip, sample_time=day, operation_type=operation, operator=operator,
        old_value="1", new_value="2", remark=remark,
    )


@pytest.fixture
async def records(db_session, add_hosts):
    await add_hosts(make_host("10.8.0.1", region="北京"), make_host("10.8.0.2", enable_status=2))
    db_session.add_all([
        record("10.8.0.1", date(2024, 1, 10)),
        record("10.8.0.1", date(2024, 3, 5), operation=2, operator="用户1", remark="设备状态变更"),
        record("10.8.0.1", date(2024, 3, 5), operator="系统"),
        record("10.8.0.2", date(2024, 2, 1), operator="用户2"),
    ])
    await db_session.commit()


class TestChangeRecords:
    async def test_newest_first(self, client: AsyncClient, auth_headers, records):
        data = (await client.get("/api/v1/change-records", headers=auth_headers)).json()
        assert data["total"] == 3
        days = [r["sample_time"] for r in data["list"]]
        assert days == ["2024-03-05", "2024-03-05", "2024-01-10"]
        # 同一天按变更序号倒序 (Same day: latest sequence first)
        assert data["list"][0]["operator"] == "系统"

    async def test_joined_host(self, client: AsyncClient, auth_headers, records):
        data = (await client.get("/api/v1/change-records", headers=auth_headers)).json()
        assert all(r["host"]["region"] == "北京" for r in data["list"])

    async def test_deleted_host_records(self, client: AsyncClient, auth_headers, records):
        data = (await client.get("/api/v1/change-records?include_deleted=true", headers=auth_headers)).json()
        assert data["total"] == 4

    async def test_search_operator_and_remark(self, client: AsyncClient, auth_headers, records):
        by_operator = (await client.get("/api/v1/change-records?search=用户1", headers=auth_headers)).json()
        assert by_operator["total"] == 1
        by_remark = (await client.get("/api/v1/change-records?search=设备", headers=auth_headers)).json()
        assert by_remark["total"] == 1

    async def test_date_range(self, client: AsyncClient, auth_headers, records):
        data = (await client.get(
            "/api/v1/change-records?start_time=2024-03-05&end_time=2024-03-05", headers=auth_headers
        )).json()
        assert data["total"] == 2

    async def test_operation_type_filter(self, client: AsyncClient, auth_headers, records):
        data = (await client.get("/api/v1/change-records?operation_type=2", headers=auth_headers)).json()
        assert [r["operator"] for r in data["list"]] == ["用户1"]

    async def test_sort_by_joined_region(self, client: AsyncClient, auth_headers, records):
        resp = await client.get(
            "/api/v1/change-records?sort_by=region&include_deleted=true", headers=auth_headers
        )
        assert resp.status_code == 200
        assert resp.json()["total"] == 4


@pytest.fixture
async def sparse_records(db_session, add_hosts):
    """缺备注、缺主机的记录 (Records without a remark or without a ledger host)."""
    await add_hosts(make_host("10.8.1.1", region="北京"), make_host("10.8.1.2", region="上海"))
    db_session.add_all([
        record("10.8.1.1", date(2024, 4, 1), operator="巡检", remark=None),
        record("10.8.1.2", date(2024, 4, 2), operator="用户3", remark="设备状态变更"),
        record("10.8.1.9", date(2024, 4, 3), operator="用户4"),
    ])
    await db_session.commit()


class TestMissingFields:
    async def test_search_skips_null_remark(self, client: AsyncClient, auth_headers, sparse_records):
        resp = await client.get("/api/v1/change-records?search=设备", headers=auth_headers)
        assert resp.status_code == 200
        assert [r["operator"] for r in resp.json()["list"]] == ["用户3"]

        # 备注为空时仍可按操作人命中 (Null remark still matches on operator)
        by_operator = (await client.get("/api/v1/change-records?search=巡检", headers=auth_headers)).json()
        assert by_operator["total"] == 1
        assert by_operator["list"][0]["remark"] is None

    async def test_sort_by_region_without_host(self, client: AsyncClient, auth_headers, sparse_records):
        resp = await client.get("/api/v1/change-records?sort_by=region", headers=auth_headers)
        assert resp.status_code == 200
        body = resp.json()
        assert body["total"] == 3
        orphans = [r for r in body["list"] if r["host"] is None]
        assert [r["ip"] for r in orphans] == ["10.8.1.9"]
        regions = [r["host"]["region"] for r in body["list"] if r["host"] is not None]
        assert regions == sorted(regions)
