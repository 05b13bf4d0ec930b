"""
API tests for the reference catalog endpoints.
"""


def test_list_exercises(client):
    response = client.get("/api/exercises")
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 9
    first = data[0]
    assert first["name"] == "Brisk Walking"
    assert first["heartHealthRating"] == 5
    assert first["caloriesBurned"] == 150


def test_list_exercises_filtered(client):
    data = client.get("/api/exercises", params={"category": "balance"}).json()
    assert [e["name"] for e in data] == ["Tai Chi"]


def test_list_exercises_unknown_filter(client):
    assert client.get("/api/exercises", params={"category": "juggling"}).status_code == 400


def test_list_foods(client):
    data = client.get("/api/foods").json()
    assert len(data) == 10
    salmon = data[0]
    assert salmon["heartHealthy"] is True
    assert salmon["nutrients"]["vitamins"] == ["Vitamin D", "Vitamin B12", "Omega-3"]


def test_list_heart_tips_filtered(client):
    data = client.get("/api/heart-tips", params={"importance": "critical"}).json()
    assert len(data) == 6
    assert all(t["importance"] == "critical" for t in data)


def test_heart_rate_references(client):
    data = client.get("/api/heart-rate-references").json()
    assert len(data) == 13
    assert data[0] == {
        "ageGroup": "Newborns (0-1 month)",
        "restingMin": 70,
        "restingMax": 190,
        "maxHeartRate": 220,
        "moderateMin": 110,
        "moderateMax": 154,
    }


def test_heart_rate_reference_for_age(client):
    response = client.get("/api/heart-rate-references/for-age", params={"age": 40})
    assert response.status_code == 200
    assert response.json()["ageGroup"] == "Adults (36-45 years)"


def test_heart_rate_reference_for_negative_age(client):
    response = client.get("/api/heart-rate-references/for-age", params={"age": -2})
    assert response.status_code == 400
