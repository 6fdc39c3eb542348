from datetime import date


def _create(client, **overrides):
    payload = {
        "date": "2025-01-01",
        "distance_km": 10.0,
        "duration": "00:50:00",
        "heart_rate": 150,
        "cadence": 176,
        "time_of_day": "morning",
        "place": "Park",
        "notes": "",
    }
    payload.update(overrides)
    return client.post("/runs/", json=payload)


def test_root_ok(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "message" in r.json()


def test_config_exposes_places(client, settings):
    r = client.get("/config")
    assert r.status_code == 200
    assert r.json() == {"is_dark_mode": False, "places": settings.places}


def test_create_and_list_run(client):
    cr = _create(client)
    assert cr.status_code == 200, cr.text
    run = cr.json()
    assert run["pace"] == "5:00/km"
    assert run["time_of_day"] == "morning"

    lr = client.get("/runs/", params={"start_date": "2024-12-30", "end_date": "2025-01-02"})
    assert lr.status_code == 200
    assert [r["id"] for r in lr.json()] == [run["id"]]


def test_create_validation(client):
    assert _create(client, distance_km=0).status_code == 422
    assert _create(client, duration="soon").status_code == 422
    assert _create(client, time_of_day="midnight").status_code == 422


def test_update_and_delete(client):
    run = _create(client).json()
    ur = client.put(f"/runs/{run['id']}", json={"duration": "00:45:00"})
    assert ur.status_code == 200
    assert ur.json()["pace"] == "4:30/km"
    assert client.put("/runs/999", json={"notes": "x"}).status_code == 404

    assert client.delete(f"/runs/{run['id']}").status_code == 200
    assert client.delete(f"/runs/{run['id']}").status_code == 404


def test_undo(client):
    assert client.post("/runs/undo").status_code == 404
    _create(client, date="2025-01-01")
    second = _create(client, date="2025-01-02").json()
    r = client.post("/runs/undo")
    assert r.status_code == 200
    assert r.json()["id"] == second["id"]
    assert len(client.get("/runs/").json()) == 1


def test_stats_endpoints(client):
    _create(client, date="2024-12-31", distance_km=5.0)
    _create(client, date="2025-01-01", distance_km=10.0)
    _create(client, date="2025-01-01", distance_km=2.0)

    summary = client.get("/stats/summary").json()
    assert summary["days_run"] == 2
    assert summary["total_distance"] == 17.0

    monthly = client.get("/stats/monthly").json()
    assert [m["month"] for m in monthly] == ["2024-12", "2025-01"]
    assert monthly[-1]["cumulative_distance"] == 17.0

    yearly = client.get("/stats/yearly").json()
    assert [y["year"] for y in yearly] == [2024, 2025]

    year = client.get("/stats/years/2025").json()
    assert year["has_data"] is True
    assert year["days"] == [{"date": "2025-01-01", "distance_km": 12.0}]
    assert client.get("/stats/years/2020").json()["has_data"] is False


def test_heatmap_image(client, settings):
    assert client.get("/images/heatmap/2025").status_code == 404
    _create(client, date="2025-03-01")
    r = client.get("/images/heatmap/2025", params={"dark_mode": True})
    assert r.status_code == 200
    assert r.headers["content-type"] == "image/png"
    assert r.content[:4] == b"\x89PNG"

    path = client.post("/images/heatmap/2025").json()["path"]
    assert path.startswith(settings.resolved_images_dir)


def test_charts(client):
    assert client.post("/images/charts").json() == {"paths": []}
    _create(client, date="2025-03-01")
    paths = client.post("/images/charts", params={"year": 2025}).json()["paths"]
    assert [p.rsplit("/", 1)[-1] for p in paths] == ["monthly_2025.png", "yearly.png"]


def test_export_and_import(client, settings):
    _create(client, date=date(2025, 2, 1).isoformat())
    path = client.post("/data/export").json()["path"]
    with open(path, "rb") as f:
        content = f.read()
    assert content.startswith(b"date,")

    r = client.post("/data/import", files={"file": ("log.csv", content, "text/csv")})
    assert r.status_code == 200
    assert r.json() == {"imported": 1}
    assert len(client.get("/runs/").json()) == 2

    bad = b"date,distance_km,duration\n2025-02-01,abc,00:10:00\n"
    r = client.post("/data/import", files={"file": ("bad.csv", bad, "text/csv")})
    assert r.status_code == 422
    assert "line 2" in r.json()["detail"]


def test_git_endpoints_without_repositories(client):
    assert client.get("/git/status").json() == {}
    assert client.post("/git/sync").status_code == 400


def test_non_finite_distance_rejected(client):
    assert _create(client, distance_km="inf").status_code == 422
    assert _create(client, distance_km="nan").status_code == 422
    assert _create(client, distance_km="nan", pace="5:00/km").status_code == 422

    run = _create(client).json()
    assert client.put(f"/runs/{run['id']}", json={"distance_km": "inf"}).status_code == 422

    summary = client.get("/stats/summary").json()
    assert summary["total_distance"] == 10.0
    assert summary["max_distance"] == 10.0


def test_import_non_utf8_upload(client):
    bad = b"date,distance_km,duration\n2025-02-01,5,00:10:00,\xff\xfe\n"
    r = client.post("/data/import", files={"file": ("bad.csv", bad, "text/csv")})
    assert r.status_code == 422
    assert "line" in r.json()["detail"]
    assert client.get("/runs/").json() == []
