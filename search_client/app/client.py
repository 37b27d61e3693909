import sys
import argparse
import requests
import re
import traceback
from typing import Any, Dict, List
from requests.adapters import HTTPAdapter


adapter = HTTPAdapter(pool_connections=10, pool_maxsize=10)

HIGHLIGHT_START = "\033[30;43m"
HIGHLIGHT_END = "\033[0m"
DEFAULT_HISTORY_ITEMS = 5


def highlight(text: str, term: str, start: str = HIGHLIGHT_START, end: str = HIGHLIGHT_END) -> str:
    """
    text 안의 term(대소문자 무시, 문자 그대로 매칭)을 모두 start/end 로 감싼다.
    원문의 대소문자는 유지한다. term 이 비어 있으면 text 그대로.
    """
    if not term:
        return text
    pattern = re.compile(re.escape(term), re.IGNORECASE)
    return pattern.sub(lambda m: f"{start}{m.group(0)}{end}", text)


class SearchClient:
    def __init__(self, base_url: str = "http://localhost:3000/api", timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.mount(self.base_url, adapter)
        self.session.headers.update({
            "Connection": "keep-alive",
            "Accept": "application/json"
        })

    def close(self):
        self.session.close()

    def _get(self, endpoint: str, params: dict) -> Any:
        url = f"{self.base_url}{endpoint}"
        response = self.session.get(url, params=params, timeout=self.timeout)
        if response.status_code >= 400:
            raise SearchClientError(response.status_code, self._error_message(response))
        return response.json()

    def _error_message(self, response: requests.Response) -> str:
        try:
            return response.json()["error"]["message"]
        except (ValueError, KeyError, TypeError):
            return response.text

    def search(self, query: str, page: int = 1, limit: int = 10, from_history: bool = False) -> Dict[str, Any]:
        params = {"query": query, "page": page, "limit": limit}
        if from_history:
            params["history"] = "true"
        return self._get("/search", params)

    def history(self, items: int = DEFAULT_HISTORY_ITEMS) -> List[Dict[str, Any]]:
        return self._get("/search/history", {"items": items})


class SearchClientError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code


def render_page(result: Dict[str, Any], term: str = "") -> str:
    """검색 응답({data, pagination})을 터미널 출력용 문자열로 만든다."""
    pagination = result["pagination"]
    items = result["data"]
    lines = []
    if not items:
        lines.append("No results.")
    offset = (pagination["currentPage"] - 1) * pagination["pageSize"]
    for no, item in enumerate(items, start=offset + 1):
        lines.append(f"{no}. {highlight(item['title'], term)}")
        lines.append(f"   {item['url']}")

    prev_mark = "< prev" if pagination["hasPreviousPage"] else "      "
    next_mark = "next >" if pagination["hasNextPage"] else "      "
    lines.append(
        f"{prev_mark}  [{pagination['currentPage']}/{pagination['totalPages']}]  {next_mark}"
        f"  ({pagination['totalItems']} results)"
    )
    return "\n".join(lines)


def render_history(entries: List[Dict[str, Any]]) -> str:
    """최근 검색 이력을 번호 붙은 바로가기 목록으로 만든다."""
    if not entries:
        return "No recent searches."
    lines = ["Recent searches:"]
    for no, entry in enumerate(entries, start=1):
        lines.append(f"  [{no}] {entry['searchQuery']} ({entry['timestamp']})")
    return "\n".join(lines)


def run_search(client: SearchClient, args) -> str:
    result = client.search(args.query, page=args.page, limit=args.limit)
    return render_page(result, term=args.highlight)


def run_history(client: SearchClient, args) -> str:
    entries = client.history(args.items)
    if args.replay is None:
        return render_history(entries)

    if args.replay < 1 or args.replay > len(entries):
        raise SystemExit(f"no history shortcut [{args.replay}] (have {len(entries)})")
    entry = entries[args.replay - 1]
    result = client.search(
        entry["searchQuery"],
        page=entry.get("pageNumber") or 1,
        limit=entry.get("limitNumber") or args.limit,
        from_history=True,
    )
    return render_page(result, term=args.highlight)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="search-client")
    parser.add_argument(
        '--api_url',
        '-u',
        default='http://localhost:3000/api',
        help='search proxy api url',
        dest='api_url')
    sub = parser.add_subparsers(dest='mode', required=True)

    search = sub.add_parser('search', help='search and print one page')
    search.add_argument('query')
    search.add_argument('--page', '-p', type=int, default=1)
    search.add_argument('--limit', '-l', type=int, default=10)
    search.add_argument('--highlight', '-H', default='', help='term to highlight in titles')

    history = sub.add_parser('history', help='list recent searches or replay one')
    history.add_argument('--items', '-n', type=int, default=DEFAULT_HISTORY_ITEMS)
    history.add_argument('--replay', '-r', type=int, default=None, help='shortcut number to re-run')
    history.add_argument('--limit', '-l', type=int, default=10)
    history.add_argument('--highlight', '-H', default='')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    client = SearchClient(base_url=args.api_url)
    try:
        if args.mode == 'search':
            print(run_search(client, args))
        elif args.mode == 'history':
            print(run_history(client, args))
    except SearchClientError as e:
        print(f'error: {e}')
        return 1
    except requests.RequestException as e:
        print(f'error: {e}')
        traceback.print_exc()
        return 1
    finally:
        client.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
