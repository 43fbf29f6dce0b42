"""
HOOPSTATS - Integration Tests
API endpoint tests against the in-memory store and a fake upstream
"""

from datetime import datetime
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import AsyncClient

from hoopstats.core.exceptions import UpstreamTransportError
from hoopstats.models import Game, Player, Team
from hoopstats.services.population import NBA_DIVISIONS

pytestmark = pytest.mark.integration


@pytest_asyncio.fixture
async def seeded(store):
    players = await store.insert_many(Player, [
        {"name": "LeBron James", "display_name": "LeBron James", "team": "Los Angeles Lakers",
         "image_url": "h.png", "points": 25.7},
        {"name": "Stephen Curry", "display_name": "Stephen Curry", "team": "Golden State Warriors",
         "points": 26.4},
    ])
    teams = await store.insert_many(Team, [
        {"name": "Boston Celtics", "abbrev": "BOS", "conference": "East", "division": "Atlantic"},
        {"name": "Atlanta Hawks", "abbrev": "ATL", "conference": "East", "division": "Southeast"},
    ])
    await store.insert_many(Game, [
        {"api_game_id": "1", "date": datetime(2024, 1, 15, 0, 30), "date_formatted": "1/15/2024",
         "status": "Final", "home_team": {"name": "Lakers", "score": 110},
         "away_team": {"name": "Celtics", "score": 104}},
        {"api_game_id": "2", "date": datetime(2024, 1, 16, 0, 30), "date_formatted": "1/16/2024",
         "status": "Scheduled", "home_team": {"name": "Hawks"}, "away_team": {"name": "Heat"}},
    ])
    return {"players": players, "teams": teams}


class TestRootEndpoints:

    @pytest.mark.asyncio
    async def test_root_directory(self, async_client: AsyncClient):
        response = await async_client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["version"] == "1.0.0"
        assert data["apiHost"] == "nba-api-free-data.p.rapidapi.com"
        assert data["endpoints"]["topPlayers"] == "/api/players/top/10"

    @pytest.mark.asyncio
    async def test_health(self, async_client: AsyncClient):
        response = await async_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"]["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_request_tracking_headers(self, async_client: AsyncClient):
        response = await async_client.get("/")

        assert response.headers["X-Request-ID"]
        assert response.headers["X-Response-Time"].endswith("s")

    @pytest.mark.asyncio
    async def test_unknown_route_uses_envelope(self, async_client: AsyncClient):
        response = await async_client.get("/api/coaches")

        assert response.status_code == 404
        assert response.json()["success"] is False


class TestPlayerEndpoints:

    @pytest.mark.asyncio
    async def test_list_players(self, async_client: AsyncClient, seeded):
        response = await async_client.get("/api/players")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == 2
        assert [p["name"] for p in body["data"]] == ["LeBron James", "Stephen Curry"]

    @pytest.mark.asyncio
    async def test_fields_are_camel_case(self, async_client: AsyncClient, seeded):
        player = (await async_client.get("/api/players")).json()["data"][0]

        assert player["displayName"] == "LeBron James"
        assert player["imageUrl"] == "h.png"
        assert "display_name" not in player

    @pytest.mark.asyncio
    async def test_get_player_by_id(self, async_client: AsyncClient, seeded):
        player_id = str(seeded["players"][1].id)

        response = await async_client.get(f"/api/players/{player_id}")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["id"] == player_id
        assert body["data"]["name"] == "Stephen Curry"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("player_id", [str(uuid4()), "not-an-id"])
    async def test_get_absent_player(self, async_client: AsyncClient, seeded, player_id):
        response = await async_client.get(f"/api/players/{player_id}")

        assert response.status_code == 404
        body = response.json()
        assert body == {"success": False, "message": "Player not found", "error": body["error"]}

    @pytest.mark.asyncio
    async def test_search(self, async_client: AsyncClient, seeded):
        response = await async_client.get("/api/players/search/bron")

        body = response.json()
        assert response.status_code == 200
        assert [p["name"] for p in body["data"]] == ["LeBron James"]

    @pytest.mark.asyncio
    async def test_top_is_not_captured_as_id(self, async_client: AsyncClient, seeded):
        response = await async_client.get("/api/players/top/10")

        body = response.json()
        assert response.status_code == 200
        assert [p["points"] for p in body["data"]] == [26.4, 25.7]


class TestTeamEndpoints:

    @pytest.mark.asyncio
    async def test_list_teams_sorted(self, async_client: AsyncClient, seeded):
        body = (await async_client.get("/api/teams")).json()
        assert [t["name"] for t in body["data"]] == ["Atlanta Hawks", "Boston Celtics"]

    @pytest.mark.asyncio
    async def test_get_team(self, async_client: AsyncClient, seeded):
        team_id = str(seeded["teams"][0].id)

        body = (await async_client.get(f"/api/teams/{team_id}")).json()

        assert body["data"]["abbrev"] == "BOS"
        assert body["data"]["conference"] == "East"

    @pytest.mark.asyncio
    async def test_get_absent_team(self, async_client: AsyncClient, seeded):
        response = await async_client.get(f"/api/teams/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["message"] == "Team not found"

    @pytest.mark.asyncio
    async def test_random_teams(self, async_client: AsyncClient, seeded):
        body = (await async_client.get("/api/teams/random/10")).json()
        assert body["count"] == 2


class TestGameEndpoints:

    @pytest.mark.asyncio
    async def test_list_games_most_recent_first(self, async_client: AsyncClient, seeded):
        body = (await async_client.get("/api/games")).json()

        assert [g["apiGameId"] for g in body["data"]] == ["2", "1"]
        assert body["data"][1]["homeTeam"]["score"] == 110
        assert body["data"][0]["homeTeam"]["score"] == 0

    @pytest.mark.asyncio
    async def test_latest(self, async_client: AsyncClient, seeded):
        body = (await async_client.get("/api/games/latest")).json()
        assert body["count"] == 2

    @pytest.mark.asyncio
    async def test_by_date_with_slashes(self, async_client: AsyncClient, seeded):
        body = (await async_client.get("/api/games/date/1/15/2024")).json()

        assert body["count"] == 1
        assert body["data"][0]["dateFormatted"] == "1/15/2024"


class TestAdminEndpoints:

    @pytest.mark.asyncio
    async def test_populate_teams(self, async_client: AsyncClient):
        response = await async_client.post("/api/admin/populate-teams")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == 30
        assert set(body["breakdown"]) == {d.name for d in NBA_DIVISIONS}

    @pytest.mark.asyncio
    async def test_populate_players_has_no_breakdown(self, async_client: AsyncClient):
        body = (await async_client.post("/api/admin/populate-players")).json()

        assert body["count"] == 4
        assert "breakdown" not in body

    @pytest.mark.asyncio
    async def test_populate_players_endpoint_not_found(self, async_client: AsyncClient, fake_collector):
        fake_collector.responses.pop("/players")

        response = await async_client.post("/api/admin/populate-players")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Players endpoint not found. Check API documentation."
        assert body["error"] == "Request failed with status code 404"

    @pytest.mark.asyncio
    async def test_populate_teams_no_data(self, async_client: AsyncClient, fake_collector):
        for division in NBA_DIVISIONS:
            fake_collector.responses[division.endpoint] = {"teamList": []}

        response = await async_client.post("/api/admin/populate-teams")

        assert response.status_code == 404
        assert response.json()["message"] == "No teams found in API response"

    @pytest.mark.asyncio
    async def test_populate_games_empty(self, async_client: AsyncClient, fake_collector):
        fake_collector.responses["/games"] = {"gameList": []}

        body = (await async_client.post("/api/admin/populate-games")).json()

        assert body["success"] is True
        assert body["count"] == 0

    @pytest.mark.asyncio
    async def test_populate_requires_post(self, async_client: AsyncClient):
        response = await async_client.get("/api/admin/populate-teams")
        assert response.status_code == 405

    @pytest.mark.asyncio
    async def test_test_api_passthrough(self, async_client: AsyncClient, fake_collector):
        fake_collector.responses["/nba-atlantic-team-list"] = {"teamList": [{"id": "x"}]}

        response = await async_client.get("/api/admin/test-api/nba-atlantic-team-list")

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": {"teamList": [{"id": "x"}]}}

    @pytest.mark.asyncio
    async def test_test_api_forwards_query(self, async_client: AsyncClient, fake_collector):
        fake_collector.responses["/games?date=2024-01-15"] = {"gameList": []}

        await async_client.get("/api/admin/test-api/games", params={"date": "2024-01-15"})

        assert fake_collector.calls == ["/games?date=2024-01-15"]

    @pytest.mark.asyncio
    async def test_test_api_upstream_failure(self, async_client: AsyncClient, fake_collector):
        fake_collector.responses["/boom"] = UpstreamTransportError(detail="Request failed with status code 503")

        response = await async_client.get("/api/admin/test-api/boom")

        assert response.status_code == 500
        assert response.json()["error"] == "Request failed with status code 503"


class TestOpenAPI:

    @pytest.mark.asyncio
    async def test_error_envelope_is_documented(self, async_client: AsyncClient):
        schema = (await async_client.get("/openapi.json")).json()

        assert set(schema["components"]["schemas"]["ErrorResponse"]["properties"]) == {
            "success", "message", "error",
        }
        responses = schema["paths"]["/api/players/{player_id}"]["get"]["responses"]
        assert responses["404"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
        assert "500" in schema["paths"]["/api/admin/populate-teams"]["post"]["responses"]
