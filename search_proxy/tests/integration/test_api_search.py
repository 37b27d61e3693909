from fastapi.testclient import TestClient
from unittest.mock import MagicMock
import pytest

from search_proxy.app.main import app
from search_proxy.app.api.deps import get_search_log, get_topic_source
from search_proxy.app.platform.exceptions import UpstreamSearchFailed


@pytest.fixture
def client():
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def mock_topic_source(complex_related_topics):
    src = MagicMock()
    # 기본 리턴 형태를 DuckDuckGo RelatedTopics 형태로 세팅
    src.related_topics.return_value = complex_related_topics
    return src


@pytest.fixture
def mock_search_log():
    return MagicMock()


@pytest.fixture(autouse=True)
def override_dependency(mock_topic_source, mock_search_log):
    app.dependency_overrides[get_topic_source] = lambda: mock_topic_source
    app.dependency_overrides[get_search_log] = lambda: mock_search_log
    yield
    app.dependency_overrides.clear()


# ================= GET /api/search =================
def test_get_search_defaults(client, mock_topic_source, mock_search_log):
    """
    기본 파라미터(page=1, limit=10)로 평탄화된 결과와 페이지 정보가 내려오는지 검증
    """
    resp = client.get("/api/search", params={"query": "x"})

    assert resp.status_code == 200
    body = resp.json()
    assert [item["url"] for item in body["data"]] == [
        "http://duckduckgo.com/X_(2022_film)",
        "http://duckduckgo.com/Generation_X",
        "http://duckduckgo.com/X_(Dark_Horse_Comics)",
        "http://duckduckgo.com/X_(Mega_Man)",
    ]
    assert body["pagination"] == {
        "totalItems": 4,
        "totalPages": 1,
        "currentPage": 1,
        "pageSize": 10,
        "hasNextPage": False,
        "hasPreviousPage": False,
    }
    mock_topic_source.related_topics.assert_called_once_with("x")

    # page/limit 을 보내지 않았으므로 이력에도 남지 않음
    entry = mock_search_log.append.call_args.args[0]
    assert entry.method.value == "GET"
    assert entry.search_query == "x"
    assert entry.page_number is None
    assert entry.limit_number is None


def test_get_search_custom_pagination(client, mock_search_log):
    resp = client.get("/api/search", params={"query": "x", "page": "2", "limit": "3"})

    assert resp.status_code == 200
    body = resp.json()
    assert len(body["data"]) == 1
    assert body["pagination"]["currentPage"] == 2
    assert body["pagination"]["totalPages"] == 2
    assert body["pagination"]["hasPreviousPage"] is True
    assert body["pagination"]["hasNextPage"] is False

    entry = mock_search_log.append.call_args.args[0]
    assert entry.page_number == 2
    assert entry.limit_number == 3


def test_get_search_page_beyond_last(client):
    resp = client.get("/api/search", params={"query": "x", "page": "9", "limit": "2"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["data"] == []
    assert body["pagination"]["currentPage"] == 9
    assert body["pagination"]["totalPages"] == 2


def test_get_search_from_history_is_not_logged(client, mock_search_log):
    resp = client.get("/api/search", params={"query": "x", "history": "true"})

    assert resp.status_code == 200
    mock_search_log.append.assert_not_called()


@pytest.mark.parametrize("params", [{}, {"query": ""}, {"query": "   "}])
def test_get_search_requires_query(client, mock_topic_source, params):
    resp = client.get("/api/search", params=params)

    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == "INVALID_INPUT"
    assert body["error"]["message"] == "Search query is required!"
    mock_topic_source.related_topics.assert_not_called()


@pytest.mark.parametrize(
    "name, value",
    [("page", "abc"), ("page", "0"), ("page", "-2"), ("limit", "abc"), ("limit", "0")],
)
def test_get_search_rejects_bad_numbers(client, mock_topic_source, name, value):
    resp = client.get("/api/search", params={"query": "x", name: value})

    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == f"Param {name} must be a number and greater than zero."
    mock_topic_source.related_topics.assert_not_called()


def test_get_search_upstream_failure_returns_502(client, mock_topic_source, mock_search_log):
    mock_topic_source.related_topics.side_effect = UpstreamSearchFailed("timeout")

    resp = client.get("/api/search", params={"query": "x"})

    assert resp.status_code == 502
    body = resp.json()
    assert body["error"]["code"] == "BACKING_SERVICE_ERROR"
    assert body["error"]["message"] == "Error trying get DuckDuckGo API data."
    mock_search_log.append.assert_not_called()


def test_get_search_unexpected_error_returns_500(client, mock_topic_source):
    mock_topic_source.related_topics.side_effect = RuntimeError("boom")

    resp = client.get("/api/search", params={"query": "x"})

    assert resp.status_code == 500


def test_get_search_empty_upstream_response(client, mock_topic_source):
    mock_topic_source.related_topics.return_value = None

    resp = client.get("/api/search", params={"query": "x", "page": "2", "limit": "5"})

    assert resp.status_code == 200
    assert resp.json() == {
        "data": [],
        "pagination": {
            "totalItems": 0,
            "totalPages": 1,
            "currentPage": 1,
            "pageSize": 0,
            "hasNextPage": False,
            "hasPreviousPage": False,
        },
    }


def test_response_carries_request_id(client):
    resp = client.get("/api/search", params={"query": "x"}, headers={"X-Request-ID": "rid-42"})

    assert resp.headers["X-Request-ID"] == "rid-42"


def test_error_envelope_carries_trace_id(client):
    resp = client.get("/api/search", headers={"X-Request-ID": "rid-43"})

    assert resp.status_code == 400
    assert resp.json()["trace_id"] == "rid-43"


# ================= POST /api/search =================
def test_post_search_defaults(client, mock_search_log):
    resp = client.post("/api/search", json={"query": "x"})

    assert resp.status_code == 200
    body = resp.json()
    assert len(body["data"]) == 4
    assert body["pagination"]["pageSize"] == 10

    entry = mock_search_log.append.call_args.args[0]
    assert entry.method.value == "POST"
    assert entry.page_number is None


def test_post_search_custom_pagination(client, mock_search_log):
    resp = client.post("/api/search", json={"query": "x", "page": 2, "limit": 2})

    assert resp.status_code == 200
    body = resp.json()
    assert [item["url"] for item in body["data"]] == [
        "http://duckduckgo.com/X_(Dark_Horse_Comics)",
        "http://duckduckgo.com/X_(Mega_Man)",
    ]
    assert body["pagination"]["hasPreviousPage"] is True

    entry = mock_search_log.append.call_args.args[0]
    assert entry.page_number == 2
    assert entry.limit_number == 2


@pytest.mark.parametrize("field", ["page", "limit"])
def test_post_search_zero_uses_default(client, mock_search_log, field):
    """
    POST 바디의 0 은 미지정으로 보고 기본값을 쓴다(이력에는 보낸 값 그대로)
    """
    resp = client.post("/api/search", json={"query": "x", field: 0})

    assert resp.status_code == 200
    body = resp.json()
    assert body["pagination"]["currentPage"] == 1
    assert body["pagination"]["pageSize"] == 10

    entry = mock_search_log.append.call_args.args[0]
    assert getattr(entry, f"{field}_number") == 0


def test_post_search_negative_page_returns_400(client):
    resp = client.post("/api/search", json={"query": "x", "page": -1})

    assert resp.status_code == 400


@pytest.mark.parametrize("payload", [{}, {"query": ""}, {"query": "  "}])
def test_post_search_requires_query(client, payload):
    resp = client.post("/api/search", json=payload)

    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Search query is required!"


def test_post_search_wrong_type_returns_422(client):
    resp = client.post("/api/search", json={"query": "x", "page": "abc"})

    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


def test_post_search_upstream_failure_returns_502(client, mock_topic_source):
    mock_topic_source.related_topics.side_effect = UpstreamSearchFailed()

    resp = client.post("/api/search", json={"query": "x"})

    assert resp.status_code == 502


def test_post_search_from_history_is_not_logged(client, mock_search_log):
    resp = client.post("/api/search", json={"query": "x", "history": True})

    assert resp.status_code == 200
    mock_search_log.append.assert_not_called()
