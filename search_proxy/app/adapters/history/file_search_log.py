"""
검색 이력을 NDJSON(한 줄에 JSON 1건) 파일로 저장/조회하는 SearchLogPort 구현체.
동시 쓰기 안전성은 보장하지 않는다.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List

from pydantic import ValidationError

from search_proxy.app.domain.ports import SearchLogPort
from search_proxy.app.domain.models import SearchLogEntry, SearchMethod

logger = logging.getLogger(__name__)

class FileSearchLog(SearchLogPort):

    def __init__(self, path: str | Path, encoding: str = "utf-8") -> None:
        self.path = self._convert_uri_to_path(str(path))
        self.encoding = encoding

    def append(self, entry: SearchLogEntry) -> None:
        """
        이력 1건을 파일 끝에 추가한다.
        저장 실패는 로그만 남기고 호출자에게 전파하지 않는다(검색 응답은 이미 완료된 상태).
        """
        try:
            self._ensure_directory()
            with open(self.path, "a", encoding=self.encoding) as f:
                f.write(entry.to_json_line() + "\n")
        except OSError as e:
            logger.error("Error trying store search history log: %s", e)

    def recent(self, items: int, method: SearchMethod = SearchMethod.GET) -> List[SearchLogEntry]:
        """
        최신 이력부터 method 가 일치하는 항목을 최대 items 개 반환한다.
        - 파일이 없거나 비어 있으면 빈 목록
        - 빈 줄은 무시, 파싱할 수 없는 줄은 로그 후 건너뜀

        Args:
            items: int (반환 개수, 0 이하이면 빈 목록)
            method: SearchMethod (기본 GET)
        Returns:
            List[SearchLogEntry]
        """
        if items <= 0:
            return []

        try:
            self._ensure_directory()
            body_text = self.path.read_text(encoding=self.encoding)
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Error reading or processing search history log: %s", e)
            return []

        entries = [e for e in self._parse_lines(body_text) if e.method == method]
        entries.reverse()
        return entries[:items]

    def _parse_lines(self, body_text: str) -> List[SearchLogEntry]:
        entries: List[SearchLogEntry] = []
        for line in body_text.split("\n"):
            if line.strip() == "":
                continue
            try:
                entries.append(SearchLogEntry.model_validate(json.loads(line)))
            except (ValueError, ValidationError) as e:
                logger.error("Error parsing log line: %s error=%s", line, e)
        return entries

    def _ensure_directory(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _convert_uri_to_path(self, uri: str) -> Path:
        """
        file:// prefix, ~ (홈 디렉터리), 상대 경로를 절대 경로로 변환한다.
        """
        path_str = uri
        if uri.startswith("file://"):
            path_str = uri.replace("file://", "", 1)
        return Path(path_str).expanduser().resolve()
