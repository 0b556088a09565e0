"""사용자 API 테스트.

User API tests — listing with sort, active users, paging, status/name
lookups in every binding style, collection lookups, criteria search,
creation, native insert, status updates and deletion.
"""

import pytest
from httpx import AsyncClient

from tests.conftest import names

URL = "/api/v1/users/"


class TestListUsers:
    """사용자 목록 테스트."""

    async def test_list_defaults_to_id_order(self, client: AsyncClient):
        res = await client.get(URL)
        assert res.status_code == 200
        assert names(res.json()) == ["zhangsan", "lisi", "wangwu", "zhaoliu", "sunqi"]

    async def test_list_sorted(self, client: AsyncClient):
        res = await client.get(URL, params={"sort": "name,desc"})
        assert res.status_code == 200
        assert names(res.json()) == ["zhaoliu", "zhangsan", "wangwu", "sunqi", "lisi"]

    async def test_list_rejects_expression_sort(self, client: AsyncClient):
        res = await client.get(URL, params={"sort": "LENGTH(name)"})
        assert res.status_code == 400
        assert "LENGTH(name)" in res.json()["detail"]

    async def test_list_rejects_bad_direction(self, client: AsyncClient):
        res = await client.get(URL, params={"sort": "name,up"})
        assert res.status_code == 400

    @pytest.mark.parametrize("mode", ["orm", "native"])
    async def test_active(self, client: AsyncClient, mode: str):
        res = await client.get(f"{URL}active", params={"mode": mode})
        assert res.status_code == 200
        assert names(res.json()) == ["zhangsan", "wangwu"]

    async def test_active_unknown_mode(self, client: AsyncClient):
        res = await client.get(f"{URL}active", params={"mode": "hql"})
        assert res.status_code == 422


class TestPaging:
    """페이지네이션 테스트."""

    @pytest.mark.parametrize("mode", ["orm", "native"])
    async def test_first_page(self, client: AsyncClient, mode: str):
        res = await client.get(f"{URL}page", params={"page": 1, "per_page": 2, "mode": mode})
        assert res.status_code == 200
        data = res.json()
        assert names(data["items"]) == ["zhangsan", "lisi"]
        assert data["total"] == 5
        assert data["pages"] == 3
        assert data["per_page"] == 2

    async def test_invalid_page(self, client: AsyncClient):
        res = await client.get(f"{URL}page", params={"page": 0})
        assert res.status_code == 400


class TestByStatus:
    """상태/이름 조회 테스트."""

    @pytest.mark.parametrize("mode", ["orm", "native"])
    async def test_by_status(self, client: AsyncClient, mode: str):
        res = await client.get(f"{URL}by-status", params={"status": 0, "mode": mode})
        assert res.status_code == 200
        assert names(res.json()) == ["lisi", "zhaoliu", "sunqi"]

    @pytest.mark.parametrize("binding, mode", [
        ("positional", "orm"),
        ("named", "orm"),
        ("named", "native"),
    ])
    async def test_by_status_and_name(self, client: AsyncClient, binding: str, mode: str):
        params = {"status": 0, "name": "lisi", "binding": binding, "mode": mode}
        res = await client.get(f"{URL}by-status", params=params)
        assert res.status_code == 200
        assert names(res.json()) == ["lisi"]

    async def test_positional_native_with_name_unsupported(self, client: AsyncClient):
        params = {"status": 0, "name": "lisi", "mode": "native"}
        res = await client.get(f"{URL}by-status", params=params)
        assert res.status_code == 400

    async def test_named_without_name_unsupported(self, client: AsyncClient):
        res = await client.get(f"{URL}by-status", params={"status": 0, "binding": "named"})
        assert res.status_code == 400

    async def test_status_required(self, client: AsyncClient):
        res = await client.get(f"{URL}by-status")
        assert res.status_code == 422


class TestByNamesAndSearch:
    """컬렉션 및 동적 조건 검색 테스트."""

    async def test_by_names(self, client: AsyncClient):
        res = await client.get(f"{URL}by-names", params=[("names", "liuba"), ("names", "lisi")])
        assert res.status_code == 200
        assert names(res.json()) == ["lisi"]

    async def test_by_names_empty(self, client: AsyncClient):
        res = await client.get(f"{URL}by-names")
        assert res.status_code == 200
        assert res.json() == []

    async def test_search_by_emails(self, client: AsyncClient):
        res = await client.post(f"{URL}search", json={"emails": ["test@test.com", "123@123.com"]})
        assert res.status_code == 200
        assert names(res.json()) == ["zhangsan"]

    async def test_search_empty_emails(self, client: AsyncClient):
        res = await client.post(f"{URL}search", json={"emails": []})
        assert res.status_code == 200
        assert res.json() == []

    async def test_search_sorted(self, client: AsyncClient):
        res = await client.post(f"{URL}search", json={"status": 0, "sort": ["name,desc"]})
        assert res.status_code == 200
        assert names(res.json()) == ["zhaoliu", "sunqi", "lisi"]


class TestModifyUsers:
    """사용자 생성/변경/삭제 테스트."""

    async def test_create_and_get(self, client: AsyncClient):
        res = await client.post(URL, json={"name": "liuba", "status": 1, "email": "liuba@example.com"})
        assert res.status_code == 201
        created = res.json()
        assert created["id"] == 6

        res = await client.get(f"{URL}{created['id']}")
        assert res.status_code == 200
        assert res.json() == created

    async def test_create_requires_name(self, client: AsyncClient):
        res = await client.post(URL, json={"name": "", "status": 1})
        assert res.status_code == 422

    async def test_native_insert(self, client: AsyncClient):
        res = await client.post(f"{URL}native", json={"name": "liuba", "status": 13, "email": "123456@123456.com"})
        assert res.status_code == 201

        res = await client.get(URL, params={"sort": "name"})
        assert names(res.json()) == ["lisi", "liuba", "sunqi", "wangwu", "zhangsan", "zhaoliu"]

    @pytest.mark.parametrize("mode", ["orm", "native"])
    async def test_update_status(self, client: AsyncClient, mode: str):
        res = await client.patch(f"{URL}status", params={"mode": mode}, json={"name": "zhangsan", "status": 0})
        assert res.status_code == 200
        assert res.json() == {"affected": 1}

        res = await client.get(f"{URL}active")
        assert names(res.json()) == ["wangwu"]

    async def test_update_status_no_match(self, client: AsyncClient):
        res = await client.patch(f"{URL}status", json={"name": "nobody", "status": 0})
        assert res.status_code == 200
        assert res.json() == {"affected": 0}

    async def test_get_missing(self, client: AsyncClient):
        res = await client.get(f"{URL}999")
        assert res.status_code == 404

    async def test_delete(self, client: AsyncClient):
        res = await client.delete(f"{URL}2")
        assert res.status_code == 200

        res = await client.get(f"{URL}2")
        assert res.status_code == 404

        res = await client.delete(f"{URL}2")
        assert res.status_code == 404


async def test_health(client: AsyncClient):
    res = await client.get("/health")
    assert res.json() == {"status": "ok"}
