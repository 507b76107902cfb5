"""
Shared fixtures: sample USCCB documents, a bolls.life chapter, and
stand-ins for the HTTP session and the chat client.
"""
import json
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest

from lumen.config import Config


USCCB_MARKDOWN = """\
# Daily Readings

## Get the Daily Readings in Your Inbox

## Tuesday of the Sixth Week in Ordinary Time

Lectionary: 340

### Reading I

[James 1:12-18](https://bible.usccb.org/bible/james/1?12)

Blessed is the man who perseveres in temptation...

### Responsorial Psalm

[Psalm 94:12-13a, 14-15, 18-19](https://bible.usccb.org/bible/psalms/94?12)

### Alleluia

[John 14:23](https://bible.usccb.org/bible/john/14?23)

### Gospel

[Mark 8:14-21](https://bible.usccb.org/bible/mark/8?14)

The disciples had forgotten to bring bread...

### Reflection

[Luke 1:1](https://example.org)
"""

USCCB_HTML = """<!DOCTYPE html>
<html><body>
<h2>Get the Daily Readings in Your Inbox</h2>
<h2>Tuesday of the Sixth Week in Ordinary Time</h2>
<div class="b-verse"><h3 class="name">Reading I</h3><div class="address"><a href="/bible/james/1?12">James 1:12-18</a></div></div>
<div class="b-verse"><h3 class="name">Gospel</h3><div class="address"><a href="/bible/mark/8?14">Mark 8:14-21</a></div></div>
</body></html>
"""


def chapter_verses(count: int = 20) -> List[Dict[str, Any]]:
    """bolls.life style chapter: verse text carries Strong's tags and markup."""
    return [
        {"pk": 1000 + n, "verse": n, "text": f"<S>{3000 + n}</S>Verse {n} <i>text</i>."}
        for n in range(1, count + 1)
    ]


class FakeResponse:
    def __init__(self, status_code: int = 200, json_data: Any = None, text: str = ""):
        self.status_code = status_code
        self._json = json_data
        self.text = text if text or json_data is None else json.dumps(json_data)

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if self._json is None:
            raise ValueError("No JSON object could be decoded")
        return self._json


class FakeSession:
    """
    Routes GET by URL prefix. A route value may be a FakeResponse or an
    exception instance to raise. Unrouted URLs get a 404.
    """

    def __init__(self, routes: Optional[Dict[str, Any]] = None):
        self.routes = dict(routes or {})
        self.calls: List[SimpleNamespace] = []

    def get(self, url, timeout=None, params=None, headers=None):
        self.calls.append(SimpleNamespace(url=url, timeout=timeout, params=params, headers=headers))
        for prefix, value in self.routes.items():
            if url.startswith(prefix):
                if isinstance(value, Exception):
                    raise value
                return value
        return FakeResponse(404, text="not found")

    def urls(self) -> List[str]:
        return [c.url for c in self.calls]


def reflection_json(title: str = "Sauerteig", question: str = "Eine Frage für heute") -> str:
    return json.dumps({
        "impuls": {"title": title, "text": "Jesus warnt vor dem Sauerteig."},
        "mitnahme": {"title": question, "text": "Was nährt dich heute?"},
        "deeper": {
            "title": "Tiefer",
            "text": "Die Jünger verstehen nicht.",
            "points": ["eins", "zwei", "drei"],
            "exercise": "Nimm dir fünf Minuten Stille.",
        },
    }, ensure_ascii=False)


def chat_reply(content: Optional[str]):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeChatClient:
    """Mimics client.chat.completions.create; replies chosen per language label."""

    LABELS = {"Deutsch": "de", "Englisch": "en", "Polnisch": "pl"}

    def __init__(self, replies: Dict[str, Any]):
        self.replies = replies
        self.calls: List[Dict[str, Any]] = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kw):
        self.calls.append(kw)
        user = kw["messages"][-1]["content"]
        lang = next(code for label, code in self.LABELS.items() if f"auf {label} als JSON" in user)
        reply = self.replies[lang]
        if isinstance(reply, Exception):
            raise reply
        return chat_reply(reply)


@pytest.fixture
def config(tmp_path) -> Config:
    return Config(magisterium_api_key="test-key", out_dir=tmp_path / "impulses")


@pytest.fixture
def usccb_markdown() -> str:
    return USCCB_MARKDOWN


@pytest.fixture
def usccb_html() -> str:
    return USCCB_HTML
