#!/usr/bin/env python3
"""
演示数据生成脚本 (Demo Data Seed Script)

通过 API 写入一套演示数据：100 台云主机（约 10% 逻辑删除）、每台一条主机指标、
前 30 台的低效主机采样、50 条通道汇总（每条 1-5 条明细），并对每台主机做 1-10 次
随机状态调整以产生变更记录。

Usage:
    python scripts/seed_demo_data.py [--api-url http://localhost:8000] [--api-key KEY] [--hosts 100]
"""
import argparse
import random
import sys
from datetime import date, timedelta

import requests

# ── 配置 ──────────────────────────────────────────────
DEFAULT_API = "http://localhost:8000"
DEFAULT_API_KEY = "cloudhost-dev-api-key"
OPERATORS = ["系统", "管理员", "用户1", "用户2", "用户3"]

VENDORS = ["阿里云", "腾讯云", "华为云", "AWS", "Azure"]
REGIONS = ["南京", "北京", "上海", "广州", "深圳"]
SYSTEMS = [
    "Windows Server 2008", "Windows Server 2012", "Windows Server 2016", "Windows Server 2019",
    "Ubuntu 18.04", "Ubuntu 20.04", "CentOS 7", "CentOS 8",
]
DEPARTMENTS = ["DSC - 南京技术 - PEVC", "WDS - 南京技术 - 股票", "研发部", "测试部", "运维部"]
CHANNEL_NAMES = ["FHBSD", "XYK", "ZCK", "HK", "TX"]
TASK_TYPES = ["LIST", "DATA", "DETAIL"]


def random_date(start: date, end: date) -> str:
    return (start + timedelta(days=random.randint(0, max((end - start).days, 0)))).isoformat()


def random_counts(low: int, high: int) -> dict:
    """生成满足 任务数 = 成功 + 失败 + 空任务 + 消重 的计数。"""
    task = random.randint(low, high)
    success = int(task * random.uniform(0.5, 1.0))
    failure = int((task - success) * random.random())
    empty = int((task - success - failure) * random.random())
    return {
        "task_count": task,
        "success_count": success,
        "failure_count": failure,
        "empty_count": empty,
        "dedup_count": task - success - failure - empty,
    }


def get_token(api_url, api_key, operator):
    resp = requests.post(
        f"{api_url}/api/v1/auth/token",
        json={"operator": operator, "api_key": api_key},
        timeout=10,
    )
    if resp.status_code != 200:
        print(f"❌ 获取令牌失败: {resp.status_code} {resp.text}")
        sys.exit(1)
    return resp.json()["access_token"]


def seed_hosts(api_url, headers, count):
    today = date.today()
    ips = []
    for index in range(count):
        payload = {
            "vendor": random.choice(VENDORS),
            "region": random.choice(REGIONS),
            "cpu_cores": random.randint(2, 9),
            "memory_gb": random.randint(4, 19),
            "disk_gb": random.randint(100, 599),
            "bandwidth_mbps": random.randint(5, 104),
            "os_name": random.choice(SYSTEMS),
            "online_date": random_date(date(2023, 1, 1), today),
            "owner": f"负责人{index + 1}",
            "department": random.choice(DEPARTMENTS),
            "shared_department": random.choice(DEPARTMENTS) if random.random() > 0.5 else None,
            "management_status": random.randint(1, 3),
            "device_status": random.randint(1, 3),
        }
        resp = requests.post(f"{api_url}/api/v1/hosts", json=payload, headers=headers, timeout=10)
        if resp.status_code != 201:
            print(f"   ⚠️  新增主机失败: {resp.status_code} {resp.text}")
            continue
        ips.append(resp.json()["ip"])
    print(f"   主机: {len(ips)} 台")
    return ips


def seed_metrics(api_url, headers, ips):
    today = date.today()
    items = [
        {
            "ip": ip,
            "sample_time": random_date(date(2024, 1, 1), today),
            "cpu_percent": random.randint(0, 99),
            "memory_percent": random.randint(0, 99),
            "disk_percent": random.randint(0, 99),
            "net_in_rate": round(random.random() * 10, 2),
            "net_out_rate": round(random.random() * 50, 2),
            "process_count": random.randint(100, 599),
            "task_count": random.randint(1000, 5999),
            "running_processes": f"wcb_a,wcb_b,process_{random.randint(0, 99)}",
        }
        for ip in ips
    ]
    resp = requests.post(f"{api_url}/api/v1/metrics", json={"items": items}, headers=headers, timeout=30)
    print(f"   主机指标: {resp.json().get('accepted', 0) if resp.status_code == 201 else resp.status_code}")


def seed_inefficient(api_url, headers, ips):
    today = date.today()
    items = []
    for ip in ips:
        item = {"ip": ip, "sample_time": random_date(date(2024, 1, 1), today)}
        for period in ("week", "month"):
            item[f"cpu_percent_{period}"] = random.randint(0, 99)
            item[f"memory_percent_{period}"] = random.randint(0, 99)
            item[f"disk_percent_{period}"] = random.randint(0, 99)
            item[f"net_in_rate_{period}"] = round(random.random() * 10, 2)
            item[f"net_out_rate_{period}"] = round(random.random() * 50, 2)
        items.append(item)
    resp = requests.post(f"{api_url}/api/v1/inefficient-hosts", json={"items": items}, headers=headers, timeout=30)
    print(f"   低效主机: {resp.json().get('accepted', 0) if resp.status_code == 201 else resp.status_code}")


def seed_channels(api_url, headers, ips, count):
    today = date.today()
    created = 0
    for index in range(count):
        payload = {
            "id": f"channel_{index + 1}",
            "channel_name": random.choice(CHANNEL_NAMES),
            "task_type": random.choice(TASK_TYPES),
            "sample_time": random_date(date(2024, 1, 1), today),
            **random_counts(500, 1499),
            "details": [
                {"business_name": random.choice(CHANNEL_NAMES), "ip": random.choice(ips), **random_counts(100, 599)}
                for _ in range(random.randint(1, 5))
            ],
        }
        resp = requests.post(f"{api_url}/api/v1/channels", json=payload, headers=headers, timeout=10)
        if resp.status_code == 201:
            created += 1
        elif resp.status_code == 409:
            print(f"   ⚠️  通道汇总已存在: {payload['id']}")
    print(f"   通道汇总: {created} 条")


def seed_changes(api_url, api_key, ips):
    """用不同操作人随机调整状态，产生变更记录。"""
    tokens = {op: get_token(api_url, api_key, op) for op in OPERATORS}
    changed = 0
    for ip in ips:
        for _ in range(random.randint(1, 10)):
            op = random.choice(OPERATORS)
            field = random.choice(["management_status", "device_status"])
            resp = requests.patch(
                f"{api_url}/api/v1/hosts/{ip}",
                json={field: random.randint(1, 3)},
                headers={"Authorization": f"Bearer {tokens[op]}"},
                timeout=10,
            )
            if resp.status_code == 200:
                changed += 1
    print(f"   状态调整: {changed} 次")


def soft_delete_some(api_url, headers, ips, ratio=0.1):
    deleted = [ip for ip in ips if random.random() < ratio]
    for ip in deleted:
        requests.delete(f"{api_url}/api/v1/hosts/{ip}", headers=headers, timeout=10)
    print(f"   逻辑删除: {len(deleted)} 台")


def main():
    parser = argparse.ArgumentParser(description="云主机服务演示数据生成")
    parser.add_argument("--api-url", default=DEFAULT_API, help="后端 API 地址")
    parser.add_argument("--api-key", default=DEFAULT_API_KEY, help="换取令牌的 API Key")
    parser.add_argument("--hosts", type=int, default=100, help="主机数量")
    parser.add_argument("--channels", type=int, default=50, help="通道汇总数量")
    args = parser.parse_args()

    print("=" * 60)
    print("  云主机服务演示数据生成器")
    print("=" * 60)
    print(f"  API: {args.api_url}")

    token = get_token(args.api_url, args.api_key, "系统")
    headers = {"Authorization": f"Bearer {token}"}

    ips = seed_hosts(args.api_url, headers, args.hosts)
    if not ips:
        print("❌ 未创建任何主机，终止")
        sys.exit(1)
    seed_metrics(args.api_url, headers, ips)
    seed_inefficient(args.api_url, headers, ips[:30])
    seed_channels(args.api_url, headers, ips, args.channels)
    seed_changes(args.api_url, args.api_key, ips)
    soft_delete_some(args.api_url, headers, ips)

    print("\n✅ 演示数据生成完成")


if __name__ == "__main__":
    main()
