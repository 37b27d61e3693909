import sys
from pathlib import Path

# 프로젝트 루트 경로를 sys.path에 추가 (…/<project-root>)
ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
from fastapi.testclient import TestClient
from search_proxy.app.main import app


# DuckDuckGo 응답 예시(직접 결과 2건 + 그룹 1개(결과 2건))
COMPLEX_RELATED_TOPICS = [
    {
        "FirstURL": "http://duckduckgo.com/X_(2022_film)",
        "Icon": {"Height": "", "URL": "", "Width": ""},
        "Result": "<a href=\"http://duckduckgo.com/X_(2022_film)\">X (2022 film)</a>A 2022 American slasher film written, directed, produced and edited by Ti West.",
        "Text": "X (2022 film) A 2022 American slasher film written, directed, produced and edited by Ti West.",
    },
    {
        "FirstURL": "http://duckduckgo.com/Generation_X",
        "Icon": {"Height": "", "URL": "/i/ffcede07.jpg", "Width": ""},
        "Result": "<a href=\"http://duckduckgo.com/Generation_X\">Generation X</a>The demographic cohort following the Baby Boomers and preceding Millennials.",
        "Text": "Generation X The demographic cohort following the Baby Boomers and preceding Millennials.",
    },
    {
        "Name": "Art, entertainment, and media",
        "Topics": [
            {
                "FirstURL": "http://duckduckgo.com/X_(Dark_Horse_Comics)",
                "Icon": {"Height": "", "URL": "/i/96b9bbc3.jpg", "Width": ""},
                "Result": "<a href=\"http://duckduckgo.com/X_(Dark_Horse_Comics)\">X (Dark Horse Comics)</a>A comic book character who starred in his own self-titled series published by Dark Horse Comics...",
                "Text": "X (Dark Horse Comics) A comic book character who starred in his own self-titled series published by Dark Horse Comics...",
            },
            {
                "FirstURL": "http://duckduckgo.com/X_(Mega_Man)",
                "Icon": {"Height": "", "URL": "", "Width": ""},
                "Result": "<a href=\"http://duckduckgo.com/X_(Mega_Man)\">X (Mega Man)</a>A character and protagonist of Capcom's Mega Man X video game series.",
                "Text": "X (Mega Man) A character and protagonist of Capcom's Mega Man X video game series.",
            },
        ],
    },
]


@pytest.fixture(scope="session")
def client():
    return TestClient(app)


@pytest.fixture
def complex_related_topics():
    return COMPLEX_RELATED_TOPICS
