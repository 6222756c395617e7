import pytest
from fastapi.testclient import TestClient

from diffplay.main import app


@pytest.fixture
def client():
    return TestClient(app)


def _body(old_text="a\nb\nc", new_text="a\nx\nc", **extra):
    body = {
        "oldFile": {"name": "before.ts", "contents": old_text, "lang": "text"},
        "newFile": {"name": "after.ts", "contents": new_text, "lang": "text"},
    }
    body.update(extra)
    return body


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_diff_split_view(client):
    response = client.post("/api/diff", json=_body())
    assert response.status_code == 200
    data = response.json()
    assert data["oldName"] == "before.ts"
    assert data["diffStyle"] == "split"
    assert [row["kind"] for row in data["rows"]] == ["unchanged", "changed", "unchanged"]
    assert data["rows"][1]["intraLineOps"] == [
        {"kind": "replace", "text": "b", "oldIndex": 0, "newIndex": 0, "newText": "x"}
    ]
    assert data["stats"] == {"additions": 1, "deletions": 1, "changed": 1, "hunks": 1}
    assert data["options"]["lineRefinement"] == "word-alt"


def test_diff_unified_view_with_options(client):
    response = client.post("/api/diff", json=_body(options={"diffStyle": "unified", "lineRefinement": "none"}))
    assert response.status_code == 200
    rows = response.json()["rows"]
    assert [(row["kind"], row["side"]) for row in rows] == [
        ("unchanged", "both"),
        ("removed", "old"),
        ("added", "new"),
        ("unchanged", "both"),
    ]


def test_invalid_options_do_not_fail(client):
    response = client.post("/api/diff", json=_body(options={"diffStyle": 3, "themes": None}))
    assert response.status_code == 200
    assert response.json()["diffStyle"] == "split"


def test_swap_flag(client):
    response = client.post("/api/diff", json=_body(old_text="", new_text="hello", swap=True))
    data = response.json()
    assert data["oldName"] == "after.ts"
    assert [(row["kind"], row["fillerSide"]) for row in data["rows"]] == [("removed", "new")]


def test_missing_file_is_rejected(client):
    response = client.post("/api/diff", json={"oldFile": {"contents": "a"}})
    assert response.status_code == 422


def test_persisted_defaults_apply_when_options_are_missing(client):
    response = client.put("/api/config", json={"presentation": {"diffStyle": "unified"}})
    assert response.status_code == 200
    assert response.json()["presentation"]["diffStyle"] == "unified"

    response = client.post("/api/diff", json=_body())
    assert response.json()["diffStyle"] == "unified"


def test_config_update_sanitizes_presentation(client):
    response = client.put("/api/config", json={"presentation": {"lineRefinement": "letters"}})
    assert response.status_code == 200
    assert response.json()["presentation"]["lineRefinement"] == "word-alt"


def test_oversized_input_is_rejected(client):
    response = client.put("/api/config", json={"maxInputChars": 5})
    assert response.status_code == 200
    assert response.json()["maxInputChars"] == 5

    response = client.post("/api/diff", json=_body(old_text="abcdef", new_text="x"))
    assert response.status_code == 413


def test_non_positive_limit_is_rejected(client):
    response = client.put("/api/config", json={"maxInputChars": 0})
    assert response.status_code == 400


def test_patch_endpoint(client):
    response = client.post(
        "/api/diff/patch",
        json={
            "oldFile": {"name": "f.txt", "contents": "a\nb\n"},
            "newFile": {"name": "f.txt", "contents": "a\nc\n"},
            "contextLines": 0,
        },
    )
    assert response.status_code == 200
    assert response.json()["patch"] == "--- a/f.txt\n+++ b/f.txt\n@@ -2 +2 @@\n-b\n+c\n"


def test_partial_options_keep_the_saved_defaults(client):
    client.put("/api/config", json={"presentation": {"lineRefinement": "none", "indicatorStyle": "classic"}})

    response = client.post("/api/diff", json=_body(options={"diffStyle": "unified", "indicatorStyle": "sideways"}))
    data = response.json()
    assert data["diffStyle"] == "unified"
    assert data["options"]["lineRefinement"] == "none"
    assert data["options"]["indicatorStyle"] == "classic"
    assert all(row["intraLineOps"] is None for row in data["rows"])


def test_config_update_keeps_other_fields(client):
    client.put("/api/config", json={"presentation": {"diffStyle": "unified"}})
    response = client.put("/api/config", json={"presentation": {"activeTheme": "light"}, "maxInputChars": 100})
    data = response.json()
    assert data["presentation"]["diffStyle"] == "unified"
    assert data["presentation"]["activeTheme"] == "light"
    assert data["maxInputChars"] == 100
