"""End-to-end runs of the generator with HTTP and the chat client stubbed."""
import json
from unittest import mock

import pytest
from openai import OpenAIError

from conftest import FakeChatClient, FakeResponse, FakeSession, chapter_verses, reflection_json
from lumen import cli

USCCB = "https://bible.usccb.org/bible/readings/021726.cfm.md"
BOLLS = "https://bolls.life/get-text"


@pytest.fixture
def env(monkeypatch, tmp_path):
    out = tmp_path / "impulses"
    for key in ("API_BIBLE_KEY", "APP_TZ", "LANGUAGES", "TEXT_BACKENDS", "FETCH_TEXTS"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("MAGISTERIUM_API_KEY", "test-key")
    monkeypatch.setenv("IMPULSES_DIR", str(out))
    return out


def stub(monkeypatch, session, client):
    monkeypatch.setattr(cli, "make_session", lambda: session)
    monkeypatch.setattr(cli, "openai_client", lambda config: client)


def all_ok_client():
    return FakeChatClient({lang: reflection_json(f"Titel {lang}") for lang in ("de", "en", "pl")})


def test_missing_api_key_aborts_before_any_network_call(monkeypatch, env, capsys):
    monkeypatch.delenv("MAGISTERIUM_API_KEY")
    make_session = mock.Mock()
    monkeypatch.setattr(cli, "make_session", make_session)
    assert cli.main(["--date", "2026-02-17"]) == 1
    make_session.assert_not_called()
    assert "MAGISTERIUM_API_KEY" in capsys.readouterr().err
    assert not env.exists()


def test_reference_source_failure_writes_nothing(monkeypatch, env):
    env.mkdir()
    latest = env / "latest.json"
    latest.write_text('{"date": "2026-02-16"}', encoding="utf-8")
    client = all_ok_client()
    stub(monkeypatch, FakeSession({USCCB: FakeResponse(500, text="oops")}), client)

    assert cli.main(["--date", "2026-02-17"]) == 1
    assert latest.read_text(encoding="utf-8") == '{"date": "2026-02-16"}'
    assert sorted(p.name for p in env.iterdir()) == ["latest.json"]
    assert client.calls == []


def test_citation_not_found_is_fatal(monkeypatch, env):
    stub(monkeypatch, FakeSession({USCCB: FakeResponse(200, text="## Monday\n### Reading I\n")}),
         all_ok_client())
    assert cli.main(["--date", "2026-02-17"]) == 1
    assert not env.exists()


def test_two_of_three_reflections_still_succeeds(monkeypatch, env, usccb_markdown):
    session = FakeSession({
        USCCB: FakeResponse(200, text=usccb_markdown),
        f"{BOLLS}/DRB/41/8/": FakeResponse(200, chapter_verses(38)),
    })
    client = FakeChatClient({
        "de": reflection_json("Sauerteig"),
        "en": reflection_json("Leaven"),
        "pl": OpenAIError("timeout"),
    })
    stub(monkeypatch, session, client)

    assert cli.main(["--date", "2026-02-17"]) == 0

    latest = json.loads((env / "latest.json").read_text(encoding="utf-8"))
    dated = json.loads((env / "2026-02-17.json").read_text(encoding="utf-8"))
    assert latest == dated
    assert latest["date"] == "2026-02-17"
    assert latest["gospelRef"] == "Markus 8,14-21"
    assert latest["gospelRefOriginal"] == "Mark 8:14-21"
    assert latest["impulses"]["de"]["impuls"]["title"] == "Sauerteig"
    assert latest["impulses"]["en"]["impuls"]["title"] == "Leaven"
    assert latest["impulses"]["pl"] is None
    assert latest["texts"]["de"] is None
    assert latest["texts"]["en"]["text"].startswith("Verse 14 text.")
    assert latest["texts"]["en"]["text"].endswith("Verse 21 text.")
    # reflections are keyed by the display reference
    assert all("Markus 8,14-21" in c["messages"][-1]["content"] for c in client.calls)


def test_zero_reflections_fails_and_writes_nothing(monkeypatch, env, usccb_markdown):
    client = FakeChatClient({lang: "no json" for lang in ("de", "en", "pl")})
    stub(monkeypatch, FakeSession({USCCB: FakeResponse(200, text=usccb_markdown)}), client)
    assert cli.main(["--date", "2026-02-17"]) == 1
    assert not env.exists()


def test_all_texts_failing_stores_single_null(monkeypatch, env, usccb_markdown):
    stub(monkeypatch, FakeSession({USCCB: FakeResponse(200, text=usccb_markdown)}), all_ok_client())
    assert cli.main(["--date", "2026-02-17"]) == 0
    latest = json.loads((env / "latest.json").read_text(encoding="utf-8"))
    assert latest["texts"] is None
    assert all(latest["impulses"][lang] for lang in ("de", "en", "pl"))


def test_unresolvable_reference_skips_text_fetch(monkeypatch, env):
    doc = "## Some Feast\n### Gospel\n[Blah 1:1](x)\n"
    session = FakeSession({USCCB: FakeResponse(200, text=doc)})
    stub(monkeypatch, session, all_ok_client())
    assert cli.main(["--date", "2026-02-17"]) == 0
    assert session.urls() == [USCCB]
    latest = json.loads((env / "latest.json").read_text(encoding="utf-8"))
    assert latest["gospelRef"] == "Blah 1,1"
    assert latest["texts"] is None
    assert latest["title"] == "Some Feast"


def test_dry_run_prints_and_writes_nothing(monkeypatch, env, usccb_markdown, capsys):
    stub(monkeypatch, FakeSession({USCCB: FakeResponse(200, text=usccb_markdown)}), all_ok_client())
    assert cli.main(["--date", "2026-02-17", "--dry-run", "--no-texts"]) == 0
    printed = capsys.readouterr().out
    record = json.loads(printed[printed.index("{"):])
    assert record["date"] == "2026-02-17"
    assert not env.exists()


def test_lang_flag_limits_calls(monkeypatch, env, usccb_markdown):
    client = all_ok_client()
    stub(monkeypatch, FakeSession({USCCB: FakeResponse(200, text=usccb_markdown)}), client)
    assert cli.main(["--date", "2026-02-17", "--lang", "de", "--no-texts"]) == 0
    latest = json.loads((env / "latest.json").read_text(encoding="utf-8"))
    assert list(latest["impulses"]) == ["de"]
    assert len(client.calls) == 1


@pytest.mark.parametrize("tz_args, env_tz", [
    (["--tz", "Mars/Olympus_Mons"], None),
    ([], "Not/AZone"),
])
def test_invalid_timezone_is_reported_not_raised(monkeypatch, env, capsys, tz_args, env_tz):
    if env_tz:
        monkeypatch.setenv("APP_TZ", env_tz)
    make_session = mock.Mock()
    monkeypatch.setattr(cli, "make_session", make_session)
    assert cli.main(tz_args) == 1
    assert "invalid timezone" in capsys.readouterr().err
    make_session.assert_not_called()
    assert not env.exists()
