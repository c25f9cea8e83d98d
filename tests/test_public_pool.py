"""公共池测试：只列出可申请主机，申请成功/冲突。"""
from httpx import AsyncClient

from conftest import make_host

APPLY = {"owner": "王五", "department": "运维部", "purpose": "压测环境"}


class TestListPool:
    async def test_only_poolable_active_hosts(self, client: AsyncClient, auth_headers, add_hosts):
        await add_hosts(
            make_host("10.0.0.1", management_status=3),
            make_host("10.0.0.2", management_status=1),
            make_host("10.0.0.3", management_status=3, enable_status=2),
            make_host("10.0.0.4", management_status=2),
        )
        resp = await client.get("/api/v1/public-pool", headers=auth_headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["total"] == 1
        assert data["list"][0]["ip"] == "10.0.0.1"

    async def test_include_deleted_does_not_expose_deleted_hosts(self, client: AsyncClient, auth_headers, add_hosts):
        await add_hosts(make_host("10.0.0.3", management_status=3, enable_status=2))
        resp = await client.get("/api/v1/public-pool?include_deleted=true", headers=auth_headers)
        assert resp.json()["total"] == 0

    async def test_search_region(self, client: AsyncClient, auth_headers, add_hosts):
        await add_hosts(
            make_host("10.0.0.1", management_status=3, region="北京"),
            make_host("10.0.0.2", management_status=3, region="上海"),
        )
        resp = await client.get("/api/v1/public-pool?search=上海", headers=auth_headers)
        assert [h["ip"] for h in resp.json()["list"]] == ["10.0.0.2"]


class TestApply:
    async def test_apply_poolable_host(self, client: AsyncClient, auth_headers, add_hosts):
        await add_hosts(make_host("10.0.0.1", management_status=3))
        resp = await client.post("/api/v1/public-pool/10.0.0.1/apply", json=APPLY, headers=auth_headers)
        assert resp.status_code == 200
        host = resp.json()
        assert host["management_status"] == 1
        assert host["owner"] == "王五"
        assert host["department"] == "运维部"

        pool = (await client.get("/api/v1/public-pool", headers=auth_headers)).json()
        assert pool["total"] == 0

        records = (await client.get("/api/v1/change-records?ip=10.0.0.1", headers=auth_headers)).json()
        assert records["total"] == 1
        assert "压测环境" in records["list"][0]["remark"]
        assert (records["list"][0]["old_value"], records["list"][0]["new_value"]) == ("3", "1")

    async def test_non_poolable_conflict_leaves_host_unchanged(self, client: AsyncClient, auth_headers, add_hosts):
        await add_hosts(make_host("10.0.0.2", management_status=1))
        before = (await client.get("/api/v1/hosts/10.0.0.2", headers=auth_headers)).json()

        resp = await client.post("/api/v1/public-pool/10.0.0.2/apply", json=APPLY, headers=auth_headers)
        assert resp.status_code == 409
        assert resp.json()["error"] == "conflict"

        after = (await client.get("/api/v1/hosts/10.0.0.2", headers=auth_headers)).json()
        assert after == before
        records = (await client.get("/api/v1/change-records", headers=auth_headers)).json()
        assert records["total"] == 0

    async def test_deleted_host_conflict(self, client: AsyncClient, auth_headers, add_hosts):
        await add_hosts(make_host("10.0.0.3", management_status=3, enable_status=2))
        resp = await client.post("/api/v1/public-pool/10.0.0.3/apply", json=APPLY, headers=auth_headers)
        assert resp.status_code == 409

    async def test_second_apply_conflicts(self, client: AsyncClient, auth_headers, add_hosts):
        await add_hosts(make_host("10.0.0.1", management_status=3))
        first = await client.post("/api/v1/public-pool/10.0.0.1/apply", json=APPLY, headers=auth_headers)
        second = await client.post("/api/v1/public-pool/10.0.0.1/apply", json=APPLY, headers=auth_headers)
        assert first.status_code == 200
        assert second.status_code == 409

    async def test_unknown_ip(self, client: AsyncClient, auth_headers):
        resp = await client.post("/api/v1/public-pool/9.9.9.9/apply", json=APPLY, headers=auth_headers)
        assert resp.status_code == 404

    async def test_purpose_required(self, client: AsyncClient, auth_headers, add_hosts):
        await add_hosts(make_host("10.0.0.1", management_status=3))
        resp = await client.post(
            "/api/v1/public-pool/10.0.0.1/apply",
            json={"owner": "王五", "department": "运维部"},
            headers=auth_headers,
        )
        assert resp.status_code == 422
