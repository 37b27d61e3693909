"""
RelatedTopics 평탄화.

업스트림 응답의 중첩 토픽 트리(결과 노드 + 이름 있는 그룹 노드)를
입력 순서(깊이 우선, 왼쪽→오른쪽)를 유지한 채 NormalizedResult 목록으로 펼친다.

    raw JSON --parse_topic_nodes--> TopicNode(tagged union) --flatten--> [NormalizedResult]

- 노드 형태 판별은 parse 단계에서 한 번만 한다.
- Topics 가 비어 있지 않으면 그룹으로 본다. FirstURL/Text 가 같이 있어도 그룹이 우선.
- 잘못된 노드는 예외 없이 건너뛴다. 입력 자체가 리스트가 아니면 빈 목록.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List

from search_proxy.app.domain.models import (
    GroupNode, LeafNode, NormalizedResult, TopicNode, UnknownNode
)
from search_proxy.app.domain.utils import normalize_text

logger = logging.getLogger(__name__)

URL_KEY = "FirstURL"
TEXT_KEY = "Text"
NAME_KEY = "Name"
TOPICS_KEY = "Topics"


def parse_topic_node(raw: Any) -> TopicNode:
    """
    원본 노드 1개를 LeafNode/GroupNode/UnknownNode 중 하나로 분류한다.
    Args:
        raw: Any (역직렬화된 JSON 값)
    Returns:
        TopicNode
    """
    if not isinstance(raw, dict):
        return UnknownNode()

    topics = raw.get(TOPICS_KEY)
    if isinstance(topics, list) and len(topics) > 0:
        name = raw.get(NAME_KEY)
        return GroupNode(
            name=name if isinstance(name, str) else None,
            children=[parse_topic_node(child) for child in topics],
        )

    if URL_KEY in raw and TEXT_KEY in raw:
        url = raw.get(URL_KEY)
        text = raw.get(TEXT_KEY)
        return LeafNode(
            url=url if isinstance(url, str) else None,
            text=text if isinstance(text, str) else None,
        )

    return UnknownNode()


def parse_topic_nodes(raw_nodes: Any) -> List[TopicNode]:
    """
    RelatedTopics 배열 전체를 분류한다. 리스트가 아니면 경고 후 빈 목록.
    """
    if not isinstance(raw_nodes, list):
        logger.warning("related topics is not a list: type=%s", type(raw_nodes).__name__)
        return []
    return [parse_topic_node(raw) for raw in raw_nodes]


def flatten_nodes(nodes: Iterable[TopicNode]) -> List[NormalizedResult]:
    """
    분류된 노드를 펼친다. 그룹은 자기 위치에 자식 결과를 그대로 끼워 넣는다.
    """
    results: List[NormalizedResult] = []
    for node in nodes:
        if isinstance(node, GroupNode):
            results.extend(flatten_nodes(node.children))
        elif isinstance(node, LeafNode):
            result = _normalize_leaf(node)
            if result is not None:
                results.append(result)
        else:
            logger.debug("skip malformed topic node")
    return results


def flatten(raw_nodes: Any) -> List[NormalizedResult]:
    """
    업스트림 RelatedTopics 를 NormalizedResult 목록으로 평탄화한다.
    호출자를 실패시키지 않는다(예외 없음).
    Args:
        raw_nodes: Any (보통 list[dict], 그 외 값이면 빈 목록)
    Returns:
        List[NormalizedResult]: 입력 순서를 유지한 결과 목록
    """
    return flatten_nodes(parse_topic_nodes(raw_nodes))


def _normalize_leaf(node: LeafNode) -> NormalizedResult | None:
    url = normalize_text(node.url)
    title = normalize_text(node.text)
    if url is None or title is None:
        logger.debug("skip topic without url/text: url=%r text=%r", node.url, node.text)
        return None
    return NormalizedResult(url=url, title=title)
