"""
API tests for the profile, BMI, health metric and walking endpoints.

Requests carry X-Forwarded-For so each test acts as a known client.
"""
# Distinct addresses so each test can act as separate clients
CLIENT_A = {"X-Forwarded-For": "203.0.113.10"}
CLIENT_B = {"X-Forwarded-For": "203.0.113.20"}


# =============================================================================
# PROFILE
# =============================================================================

def test_get_profile_not_found(client):
    response = client.get("/api/profile", headers=CLIENT_A)
    assert response.status_code == 404
    assert response.json()["detail"] == "Profile not found"


def test_save_profile_partial_uses_defaults(client):
    response = client.post("/api/profile", json={"height": 180}, headers=CLIENT_A)
    assert response.status_code == 200
    assert response.json() == {"height": 180.0, "weight": 70.0, "age": 30, "gender": "other"}

    response = client.get("/api/profile", headers=CLIENT_A)
    assert response.status_code == 200
    assert response.json()["height"] == 180.0


def test_save_profile_invalid_values(client):
    for body in ({"height": -5}, {"weight": 0}, {"age": 0}, {"gender": "robot"}, {"age": "old"}):
        response = client.post("/api/profile", json=body, headers=CLIENT_A)
        assert response.status_code == 400, body

    assert client.get("/api/profile", headers=CLIENT_A).status_code == 404


def test_save_profile_rejects_numeric_strings(client):
    for body in ({"height": "170"}, {"weight": "70"}, {"age": "30"}, {"height": True}):
        response = client.post("/api/profile", json=body, headers=CLIENT_A)
        assert response.status_code == 400, body

    assert client.get("/api/profile", headers=CLIENT_A).status_code == 404


def test_save_profile_accepts_whole_float_age(client):
    response = client.post("/api/profile", json={"age": 30.0, "height": 175}, headers=CLIENT_A)
    assert response.status_code == 200
    assert response.json()["age"] == 30

    response = client.post("/api/profile", json={"age": 30.5}, headers=CLIENT_A)
    assert response.status_code == 400


def test_save_profile_rejects_measurements_without_usable_bmi(client):
    for body in ({"height": 1e-200, "weight": 70}, {"height": 1, "weight": 1e308}):
        response = client.post("/api/profile", json=body, headers=CLIENT_A)
        assert response.status_code == 400, body

    assert client.get("/api/profile", headers=CLIENT_A).status_code == 404
    assert client.get("/api/bmi", headers=CLIENT_A).status_code == 404
    assert client.get("/api/walking-recommendation", headers=CLIENT_A).status_code == 200


def test_profiles_are_per_client(client):
    client.post("/api/profile", json={"height": 150}, headers=CLIENT_A)
    assert client.get("/api/profile", headers=CLIENT_B).status_code == 404


# =============================================================================
# BMI
# =============================================================================

def test_bmi_without_profile(client):
    response = client.get("/api/bmi", headers=CLIENT_A)
    assert response.status_code == 404
    assert response.json()["detail"] == "Profile not found. Please enter your height and weight."


def test_bmi_with_profile(client):
    client.post("/api/profile", json={"height": 160, "weight": 45}, headers=CLIENT_A)
    response = client.get("/api/bmi", headers=CLIENT_A)
    assert response.status_code == 200
    data = response.json()
    assert data["category"] == "underweight"
    assert abs(data["bmi"] - 17.58) < 0.01
    assert data["recommendation"].startswith("You may be underweight.")


# =============================================================================
# HEALTH METRICS
# =============================================================================

def test_today_creates_defaults(client):
    response = client.get("/api/health-metrics/today", headers=CLIENT_A)
    assert response.status_code == 200
    data = response.json()
    assert {k: data[k] for k in ("steps", "heartRate", "systolicBP", "diastolicBP")} == {
        "steps": 0, "heartRate": 72, "systolicBP": 120, "diastolicBP": 80,
    }
    assert data["date"].endswith("Z")


def test_reading_today_does_not_create_profile(client):
    assert client.get("/api/health-metrics/today", headers=CLIENT_A).status_code == 200
    assert client.get("/api/health-metrics/assessment", headers=CLIENT_A).status_code == 200

    assert client.get("/api/profile", headers=CLIENT_A).status_code == 404
    response = client.get("/api/bmi", headers=CLIENT_A)
    assert response.status_code == 404
    assert response.json()["detail"] == "Profile not found. Please enter your height and weight."

    walking = client.get("/api/walking-recommendation", headers=CLIENT_A).json()
    assert walking["tips"][0] == "Start with 5-10 minutes if you're new to walking"


def test_first_update_creates_profile(client):
    client.post("/api/health-metrics/steps", json={"steps": 10}, headers=CLIENT_A)
    assert client.get("/api/profile", headers=CLIENT_A).json() == {
        "height": 170.0, "weight": 70.0, "age": 30, "gender": "other",
    }


def test_whole_number_floats_accepted(client):
    response = client.post("/api/health-metrics/steps", json={"steps": 5000.0}, headers=CLIENT_A)
    assert response.status_code == 200
    assert response.json()["steps"] == 5000

    response = client.post(
        "/api/health-metrics/blood-pressure",
        json={"systolic": 118.0, "diastolic": 76.0},
        headers=CLIENT_A,
    )
    assert response.status_code == 200
    assert (response.json()["systolicBP"], response.json()["diastolicBP"]) == (118, 76)


def test_steps_overwrite(client):
    first = client.post("/api/health-metrics/steps", json={"steps": 5000}, headers=CLIENT_A)
    assert first.status_code == 200
    assert first.json()["steps"] == 5000

    second = client.post("/api/health-metrics/steps", json={"steps": 8000}, headers=CLIENT_A)
    data = second.json()
    assert (data["steps"], data["heartRate"], data["systolicBP"], data["diastolicBP"]) == (8000, 72, 120, 80)


def test_steps_invalid(client):
    for body in ({"steps": -1}, {"steps": "many"}, {"steps": 10.5}, {}):
        response = client.post("/api/health-metrics/steps", json=body, headers=CLIENT_A)
        assert response.status_code == 400, body


def test_validation_error_shape(client):
    response = client.post("/api/health-metrics/steps", json={"steps": "many"}, headers=CLIENT_A)
    data = response.json()
    assert data["detail"] == "Invalid input"
    assert data["context"]["errors"][0]["field"].startswith("steps")


def test_heart_rate(client):
    response = client.post("/api/health-metrics/heart-rate", json={"heartRate": 64}, headers=CLIENT_A)
    assert response.status_code == 200
    assert response.json()["heartRate"] == 64

    response = client.post("/api/health-metrics/heart-rate", json={"heartRate": 10}, headers=CLIENT_A)
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid heart rate value"

    assert client.get("/api/health-metrics/today", headers=CLIENT_A).json()["heartRate"] == 64


def test_blood_pressure(client):
    response = client.post(
        "/api/health-metrics/blood-pressure",
        json={"systolic": 125, "diastolic": 82},
        headers=CLIENT_A,
    )
    assert response.status_code == 200
    data = response.json()
    assert (data["systolicBP"], data["diastolicBP"]) == (125, 82)


def test_blood_pressure_diastolic_not_below_systolic(client):
    response = client.post(
        "/api/health-metrics/blood-pressure",
        json={"systolic": 80, "diastolic": 120},
        headers=CLIENT_A,
    )
    assert response.status_code == 400

    data = client.get("/api/health-metrics/today", headers=CLIENT_A).json()
    assert (data["systolicBP"], data["diastolicBP"]) == (120, 80)


def test_assessment_uses_walking_goal(client):
    client.post("/api/profile", json={"height": 180, "weight": 100}, headers=CLIENT_A)
    client.post("/api/health-metrics/steps", json={"steps": 4000}, headers=CLIENT_A)
    response = client.get("/api/health-metrics/assessment", headers=CLIENT_A)
    assert response.status_code == 200
    data = response.json()
    assert data["steps"] == {"steps": 4000, "goal": 8000, "percent": 50.0, "goalReached": False}
    assert data["heartRate"]["label"] == "Normal"
    assert data["bloodPressure"]["label"] == "High Stage 1"


# =============================================================================
# WALKING RECOMMENDATION
# =============================================================================

def test_walking_default(client):
    response = client.get("/api/walking-recommendation", headers=CLIENT_A)
    assert response.status_code == 200
    data = response.json()
    assert data["dailySteps"] == 10000
    assert data["intensity"] == "Moderate pace"
    assert len(data["tips"]) == 4


def test_walking_obese(client):
    client.post("/api/profile", json={"height": 180, "weight": 100}, headers=CLIENT_A)
    data = client.get("/api/walking-recommendation", headers=CLIENT_A).json()
    assert data["dailySteps"] == 8000
    assert len(data["tips"]) == 5


# =============================================================================
# CLIENT IDENTIFICATION
# =============================================================================

def test_loopback_client_tracked_by_cookie(client):
    loopback = {"X-Forwarded-For": "127.0.0.1"}
    first = client.post("/api/health-metrics/steps", json={"steps": 321}, headers=loopback)
    assert "vitals_session" in first.cookies

    # TestClient keeps the cookie, so the same record comes back
    second = client.get("/api/health-metrics/today", headers=loopback)
    assert second.json()["steps"] == 321
