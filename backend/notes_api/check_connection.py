"""
全链路联通自检

用法：
    python -m notes_api.check_connection [base_url]

依次检查：健康 -> 注册/登录 -> 创建笔记 -> 列表 -> 详情 -> 删除 -> 确认 404
"""
import asyncio
import sys

import httpx

CHECK_USER = {
    "username": "link_test_user",
    "email": "link_test_user@example.com",
    "password": "password123",
}


async def check_full_link(client: httpx.AsyncClient, user: dict = None) -> bool:
    """对已配置 base_url 的 client 跑一遍主流程，全部通过返回 True"""
    user = user or CHECK_USER
    print("=== 开始全链路联通自检 ===")

    # 1. 检查后端健康
    print("\n1. 检查后端健康 (/health)...")
    try:
        resp = await client.get("/health")
    except httpx.HTTPError as e:
        print(f"   [FAIL] 无法连接后端: {e}")
        print("   建议：请确保已在 backend 目录下运行 'uvicorn notes_api.main:app --port 4000'")
        return False
    if resp.status_code != 200 or resp.json().get("ok") is not True:
        print(f"   [FAIL] 后端返回 {resp.status_code}: {resp.text}")
        return False
    print("   [OK] 后端存活")

    # 2. 注册（已存在则登录）
    print("\n2. 注册 / 登录测试用户...")
    resp = await client.post("/api/auth/register", json=user)
    if resp.status_code == 409:
        resp = await client.post(
            "/api/auth/login",
            json={"username": user["username"], "password": user["password"]},
        )
    if resp.status_code not in (200, 201):
        print(f"   [FAIL] 认证失败 {resp.status_code}: {resp.text}")
        return False
    headers = {"Authorization": f"Bearer {resp.json()['token']}"}
    print("   [OK] 已获取 token")

    # 3. 创建笔记
    print("\n3. 创建测试笔记...")
    resp = await client.post(
        "/api/notes",
        data={"title": "联通测试笔记", "description": "check_connection"},
        files={"file": ("check.txt", b"link check", "text/plain")},
        headers=headers,
    )
    if resp.status_code != 201:
        print(f"   [FAIL] 笔记创建失败 {resp.status_code}: {resp.text}")
        if "no such table" in resp.text:
            print("   原因推测：数据库表未正确创建。请检查 notes_api/database.py 的 init_db")
        return False
    note = resp.json()
    print(f"   [OK] 笔记创建成功, NoteID: {note['id']}, file_url: {note['file_url']}")

    # 4. 列表与详情
    print("\n4. 读取列表与详情...")
    resp = await client.get("/api/notes", headers=headers)
    if resp.status_code != 200 or note["id"] not in [n["id"] for n in resp.json()]:
        print(f"   [FAIL] 列表中没有新笔记 {resp.status_code}: {resp.text}")
        return False
    resp = await client.get(f"/api/notes/{note['id']}", headers=headers)
    if resp.status_code != 200 or resp.json()["title"] != note["title"]:
        print(f"   [FAIL] 详情读取失败 {resp.status_code}: {resp.text}")
        return False
    print("   [OK] 列表 / 详情正常")

    # 5. 删除并确认
    print("\n5. 删除笔记...")
    resp = await client.delete(f"/api/notes/{note['id']}", headers=headers)
    if resp.status_code != 204:
        print(f"   [FAIL] 删除失败 {resp.status_code}: {resp.text}")
        return False
    resp = await client.get(f"/api/notes/{note['id']}", headers=headers)
    if resp.status_code != 404:
        print(f"   [FAIL] 删除后仍可读取 {resp.status_code}: {resp.text}")
        return False
    print("   [OK] 删除成功")

    print("\n=== 自检完成 ===")
    return True


async def main(base_url: str) -> bool:
    async with httpx.AsyncClient(base_url=base_url, timeout=10.0) as client:
        return await check_full_link(client)


if __name__ == "__main__":
    url = sys.argv[1] if len(sys.argv) > 1 else "http://127.0.0.1:4000"
    try:
        ok = asyncio.run(main(url))
    except KeyboardInterrupt:
        ok = False
    sys.exit(0 if ok else 1)
