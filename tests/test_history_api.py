"""Tests for history API and page endpoints."""

import pytest


class TestElementHistoryApi:
    """Tests for /api/{type}/{id}/history."""

    @pytest.mark.asyncio
    async def test_node_history(self, client):
        response = await client.get("/api/node/42/history")
        assert response.status_code == 200

        data = response.json()
        assert data["element_type"] == "node"
        assert data["element_id"] == 42
        assert len(data["versions"]) == 3
        assert [line["name"] for line in data["properties"]] == [
            "User", "Visible", "Changeset", "Lat", "Lon"
        ]
        assert data["nodes"] is None
        assert data["members"] is None

    @pytest.mark.asyncio
    async def test_cells_carry_class_value_and_link(self, client):
        data = (await client.get("/api/node/42/history")).json()
        user_cells = data["properties"][0]["cells"]
        assert user_cells[0] == {
            "clz": "new",
            "val": "alice",
            "url": "https://osm.org/user/alice",
        }
        assert user_cells[1]["clz"] == "changed"
        assert user_cells[2]["clz"] == "unchanged"

    @pytest.mark.asyncio
    async def test_tag_rows(self, client):
        data = (await client.get("/api/node/42/history")).json()
        tags = {line["key"]: [c["clz"] for c in line["cells"]] for line in data["tags"]}
        assert tags == {
            "amenity": ["notpresent", "new", "removed"],
            "name": ["notpresent", "new", "removed"],
        }

    @pytest.mark.asyncio
    async def test_way_nodes(self, client):
        data = (await client.get("/api/way/7/history")).json()
        rows = {line["ref"]: [c["clz"] for c in line["cells"]] for line in data["nodes"]}
        assert rows == {
            1: ["new", "unchanged"],
            2: ["new", "unchanged"],
            3: ["new", "removed"],
            4: ["notpresent", "new"],
        }

    @pytest.mark.asyncio
    async def test_relation_members(self, client):
        data = (await client.get("/api/relation/9/history")).json()
        members = data["members"]
        assert members[0]["member"] == {"type": "way", "ref": 5, "role": "outer"}
        assert [c["clz"] for c in members[0]["cells"]] == ["new", "unchanged"]
        assert [c["clz"] for c in members[1]["cells"]] == ["notpresent", "new"]

    @pytest.mark.asyncio
    async def test_not_found(self, client):
        response = await client.get("/api/way/12345/history")
        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "element_not_found"

    @pytest.mark.asyncio
    async def test_upstream_error(self, client):
        response = await client.get("/api/node/500/history")
        assert response.status_code == 502
        assert response.json()["detail"]["error"] == "upstream_error"

    @pytest.mark.asyncio
    async def test_invalid_type(self, client):
        response = await client.get("/api/changeset/1/history")
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_invalid_id(self, client):
        response = await client.get("/api/node/0/history")
        assert response.status_code == 422


class TestHistoryPages:
    """Tests for the HTML pages under /history."""

    @pytest.mark.asyncio
    async def test_root_redirects(self, client):
        response = await client.get("/")
        assert response.status_code == 302
        assert response.headers["location"] == "/history"

    @pytest.mark.asyncio
    async def test_index(self, client):
        response = await client.get("/history")
        assert response.status_code == 200
        assert "Deep History" in response.text
        assert 'action="/history/relation.php"' in response.text

    @pytest.mark.asyncio
    async def test_legacy_redirect(self, client):
        response = await client.get("/history/way.php", params={"id": "7"})
        assert response.status_code == 302
        assert response.headers["location"] == "/history/way/7"

    @pytest.mark.asyncio
    async def test_legacy_redirect_without_id(self, client):
        response = await client.get("/history/node.php")
        assert response.status_code == 302
        assert response.headers["location"] == "/history"

    @pytest.mark.asyncio
    async def test_legacy_redirect_non_numeric_id(self, client):
        response = await client.get("/history/node.php", params={"id": "abc"})
        assert response.headers["location"] == "/history"

    @pytest.mark.asyncio
    async def test_node_page(self, client):
        response = await client.get("/history/node/42")
        assert response.status_code == 200
        assert "History of Node" in response.text
        assert 'class="new"' in response.text
        assert "Corner &lt;Cafe&gt;" in response.text

    @pytest.mark.asyncio
    async def test_relation_page(self, client):
        response = await client.get("/history/relation/9")
        assert response.status_code == 200
        assert "Members" in response.text
        assert "9 - (no role)" in response.text

    @pytest.mark.asyncio
    async def test_missing_element_page(self, client):
        response = await client.get("/history/node/666")
        assert response.status_code == 404
        assert "Object Missing" in response.text
        assert "HTTP 410" in response.text

    @pytest.mark.asyncio
    async def test_upstream_error_page(self, client):
        response = await client.get("/history/node/500")
        assert response.status_code == 502
        assert "OSM API Unavailable" in response.text
        assert "/node/500/history.json" in response.text

    @pytest.mark.asyncio
    async def test_static_assets(self, client):
        response = await client.get("/history/static/app.js")
        assert response.status_code == 200
        assert "scrollToId" in response.text
