"""主机指标与低效主机测试：上报、联表主机摘要、日期过滤、逻辑删除可见性。"""
from httpx import AsyncClient

from conftest import make_host


def metric(ip, sample_time="2024-05-01", cpu=50.0, **overrides):
    item = {
        "ip": ip,
        "sample_time": sample_time,
        "cpu_percent": cpu,
        "memory_percent": 40.0,
        "disk_percent": 30.0,
        "net_in_rate": 1.5,
        "net_out_rate": 12.0,
        "process_count": 200,
        "task_count": 1500,
        "running_processes": "wcb_a,wcb_b",
    }
    item.update(overrides)
    return item


def inefficiency(ip, sample_time="2024-05-01"):
    item = {"ip": ip, "sample_time": sample_time}
    for period in ("week", "month"):
        item.update({
            f"cpu_percent_{period}": 3.0,
            f"memory_percent_{period}": 10.0,
            f"disk_percent_{period}": 20.0,
            f"net_in_rate_{period}": 0.1,
            f"net_out_rate_{period}": 0.2,
        })
    return item


class TestHostMetrics:
    async def test_ingest_and_join_host(self, client: AsyncClient, auth_headers, add_hosts):
        await add_hosts(make_host("10.1.0.1", region="广州"))
        resp = await client.post(
            "/api/v1/metrics",
            json={"items": [metric("10.1.0.1"), metric("10.1.0.99")]},
            headers=auth_headers,
        )
        assert resp.status_code == 201
        assert resp.json()["accepted"] == 2

        data = (await client.get("/api/v1/metrics", headers=auth_headers)).json()
        assert data["total"] == 2
        by_ip = {m["ip"]: m for m in data["list"]}
        assert by_ip["10.1.0.1"]["host"]["region"] == "广州"
        # 无对应主机的指标照常返回，host 为 null (Metrics without a host are kept with host=null)
        assert by_ip["10.1.0.99"]["host"] is None

    async def test_percent_out_of_range(self, client: AsyncClient, auth_headers):
        resp = await client.post("/api/v1/metrics", json={"items": [metric("10.1.0.1", cpu=120)]}, headers=auth_headers)
        assert resp.status_code == 422

    async def test_invalid_ip(self, client: AsyncClient, auth_headers):
        resp = await client.post("/api/v1/metrics", json={"items": [metric("not-an-ip")]}, headers=auth_headers)
        assert resp.status_code == 422

    async def test_empty_batch(self, client: AsyncClient, auth_headers):
        resp = await client.post("/api/v1/metrics", json={"items": []}, headers=auth_headers)
        assert resp.status_code == 422

    async def test_date_bounds_and_ip_search(self, client: AsyncClient, auth_headers):
        await client.post(
            "/api/v1/metrics",
            json={"items": [
                metric("10.1.0.1", sample_time="2024-04-30"),
                metric("10.1.0.1", sample_time="2024-05-01"),
                metric("10.2.0.1", sample_time="2024-05-15"),
                metric("10.1.0.2", sample_time="2024-06-01"),
            ]},
            headers=auth_headers,
        )
        resp = await client.get(
            "/api/v1/metrics?start_time=2024-05-01&end_time=2024-05-31", headers=auth_headers
        )
        assert resp.json()["total"] == 2

        resp = await client.get("/api/v1/metrics?search=10.1.", headers=auth_headers)
        assert resp.json()["total"] == 3

    async def test_deleted_host_metrics_hidden_by_default(self, client: AsyncClient, auth_headers, add_hosts):
        await add_hosts(make_host("10.1.0.1", enable_status=2), make_host("10.1.0.2"))
        await client.post(
            "/api/v1/metrics",
            json={"items": [metric("10.1.0.1"), metric("10.1.0.2")]},
            headers=auth_headers,
        )
        default = (await client.get("/api/v1/metrics", headers=auth_headers)).json()
        assert [m["ip"] for m in default["list"]] == ["10.1.0.2"]

        everything = (await client.get("/api/v1/metrics?include_deleted=true", headers=auth_headers)).json()
        assert everything["total"] == 2

    async def test_sort_by_cpu(self, client: AsyncClient, auth_headers):
        await client.post(
            "/api/v1/metrics",
            json={"items": [metric("10.1.0.1", cpu=70), metric("10.1.0.2", cpu=10), metric("10.1.0.3", cpu=40)]},
            headers=auth_headers,
        )
        resp = await client.get("/api/v1/metrics?sort_by=cpu_percent&order=asc", headers=auth_headers)
        assert [m["cpu_percent"] for m in resp.json()["list"]] == [10, 40, 70]


class TestInefficientHosts:
    async def test_ingest_and_list(self, client: AsyncClient, auth_headers, add_hosts):
        await add_hosts(make_host("10.3.0.1"))
        resp = await client.post(
            "/api/v1/inefficient-hosts",
            json={"items": [inefficiency("10.3.0.1"), inefficiency("10.3.0.2", "2024-07-01")]},
            headers=auth_headers,
        )
        assert resp.status_code == 201

        data = (await client.get("/api/v1/inefficient-hosts", headers=auth_headers)).json()
        assert data["total"] == 2
        assert data["list"][0]["ip"] == "10.3.0.1"
        assert data["list"][0]["host"]["owner"] == "负责人1"
        assert data["list"][0]["cpu_percent_week"] == 3.0

    async def test_filter_by_ip(self, client: AsyncClient, auth_headers):
        await client.post(
            "/api/v1/inefficient-hosts",
            json={"items": [inefficiency("10.3.0.1"), inefficiency("10.3.0.2")]},
            headers=auth_headers,
        )
        resp = await client.get("/api/v1/inefficient-hosts?ip=10.3.0.2", headers=auth_headers)
        assert [r["ip"] for r in resp.json()["list"]] == ["10.3.0.2"]
