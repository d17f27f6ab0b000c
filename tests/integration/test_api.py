"""Integration tests for API endpoints"""

import logging

import pytest
from fastapi.testclient import TestClient
from fincoach_gateway.api.main import create_app
from fincoach_gateway.config import settings
from fincoach_gateway.infrastructure.observability.logging import CustomJsonFormatter

pytestmark = pytest.mark.integration


@pytest.fixture
def rent_only_payload():
    """One paycheck and one rent payment ten days before the evaluation date"""
    return {
        "transactions": [
            {
                "amount": 5000,
                "description": "Paycheck",
                "transaction_type": "income",
                "transaction_date": "2024-06-05",
            },
            {
                "amount": -1500,
                "description": "rent payment",
                "transaction_type": "expense",
                "transaction_date": "2024-06-05",
            },
        ],
        "accounts": [],
        "as_of": "2024-06-15",
    }


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient, rent_only_payload: dict):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/analysis", json=rent_only_payload)

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "fincoach_analysis_total" in response.text
    assert "http_request_duration_seconds" in response.text


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_request_id_is_generated(client: TestClient):
    response = client.get("/health")
    assert response.headers["X-Request-ID"]


def test_categorize_endpoint(client: TestClient):
    """Test POST /v1/transactions/categorize keeps order and tags categories"""
    response = client.post(
        "/v1/transactions/categorize",
        json={
            "transactions": [
                {
                    "amount": -42.1,
                    "description": "Shell gas station",
                    "transaction_type": "expense",
                    "transaction_date": "2024-06-01",
                },
                {
                    "amount": -9.99,
                    "description": "Mystery",
                    "transaction_type": "expense",
                    "transaction_date": "2024-06-02",
                },
            ]
        },
    )

    assert response.status_code == 200
    data = response.json()["transactions"]
    assert [t["category"] for t in data] == ["Transportation", "Other"]
    assert data[0]["amount"] == -42.1


def test_analysis_endpoint_rent_scenario(client: TestClient, rent_only_payload: dict):
    """Test POST /v1/analysis end to end for a rent-heavy month"""
    response = client.post("/v1/analysis", json=rent_only_payload)

    assert response.status_code == 200
    data = response.json()

    assert data["transaction_count"] == 2
    assert data["metrics"]["total_income"] == 5000
    assert data["metrics"]["total_expenses"] == 1500
    assert data["metrics"]["savings_rate"] == pytest.approx(70.0)
    assert data["metrics"]["emergency_fund_months"] == 0

    assert data["spending_by_category"] == {
        "Housing": {"amount": 1500, "percentage": 100.0, "transaction_count": 1}
    }

    assert [i["title"] for i in data["insights"]] == [
        "Insufficient Emergency Fund",
        "High Housing Costs",
        "Excellent Savings Rate",
    ]
    assert data["insights"][0]["priority"] == "high"
    assert data["insights"][0]["type"] == "critical"


def test_analysis_endpoint_counts_savings_accounts(client: TestClient, rent_only_payload: dict):
    """Test savings balances feed the emergency fund"""
    rent_only_payload["accounts"] = [
        {"account_type": "savings", "current_balance": 1500},
        {"account_type": "checking", "current_balance": 9000},
    ]

    data = client.post("/v1/analysis", json=rent_only_payload).json()

    # 1500 expenses over 3 months = 500 / month
    assert data["metrics"]["emergency_fund_months"] == pytest.approx(3.0)
    assert "Emergency Fund Needs Growth" in [i["title"] for i in data["insights"]]


def test_analysis_endpoint_empty_history(client: TestClient):
    response = client.post("/v1/analysis", json={"as_of": "2024-06-15"})

    assert response.status_code == 200
    data = response.json()
    assert data["spending_by_category"] == {}
    assert data["metrics"]["savings_rate"] == 0
    # Zero savings rate and no emergency fund are both flagged
    assert [i["title"] for i in data["insights"]] == ["Low Savings Rate", "Insufficient Emergency Fund"]


def test_analysis_endpoint_rejects_unknown_transaction_type(client: TestClient):
    response = client.post(
        "/v1/analysis",
        json={
            "transactions": [
                {"amount": 1, "description": "x", "transaction_type": "gift", "transaction_date": "2024-06-01"}
            ]
        },
    )
    assert response.status_code == 422


def test_recommendations_endpoint(client: TestClient):
    """Test POST /v1/recommendations for a 34-year-old moderate investor"""
    response = client.post(
        "/v1/recommendations",
        json={
            "profile": {
                "risk_tolerance": "moderate",
                "financial_goals": ["retirement"],
                "date_of_birth": "1989-07-01",
            },
            "accounts": [{"account_type": "savings", "current_balance": 10000}],
            "as_of": "2024-06-15",
        },
    )

    assert response.status_code == 200
    data = response.json()

    assert data["profile"]["current_age"] == 34
    assert data["profile"]["time_horizon_years"] == 31
    assert data["profile"]["available_to_invest"] == pytest.approx(8000)

    allocation = data["recommendation"]["allocation"]
    assert allocation == {"stocks": 72, "bonds": 22, "real_estate": 4, "commodities": 1, "cash": 3}
    assert data["recommendation"]["risk_level"] == "Medium"
    assert len(data["recommendation"]["reasoning"]) == 4
    assert data["risk_assessment"]["risk_level"] in {"Low", "Moderate", "High"}


def test_recommendations_endpoint_custom_retirement_age(client: TestClient):
    response = client.post(
        "/v1/recommendations",
        json={
            "profile": {"date_of_birth": "1989-07-01"},
            "retirement_age": 60,
            "as_of": "2024-06-15",
        },
    )

    data = response.json()
    assert data["profile"]["time_horizon_years"] == 26
    assert data["profile"]["risk_tolerance"] == "moderate"  # service default
    assert data["profile"]["available_to_invest"] == 1000


def test_recommendations_endpoint_requires_birth_date(client: TestClient):
    """Test missing date of birth is a validation failure, not a server error"""
    response = client.post("/v1/recommendations", json={"profile": {"risk_tolerance": "aggressive"}})

    assert response.status_code == 422
    assert "Date of birth" in response.json()["detail"]


def test_allocation_risk_endpoint(client: TestClient):
    response = client.post(
        "/v1/allocation/risk",
        json={"stocks": 0, "bonds": 0, "real_estate": 0, "commodities": 0, "cash": 100},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["risk_level"] == "Low"
    assert data["risk_score"] == pytest.approx(5.0)


def test_allocation_risk_endpoint_rejects_negative_weights(client: TestClient):
    response = client.post(
        "/v1/allocation/risk",
        json={"stocks": -10, "bonds": 0, "real_estate": 0, "commodities": 0, "cash": 110},
    )
    assert response.status_code == 422


def test_simple_allocation_endpoint(client: TestClient):
    response = client.post("/v1/allocation/simple", json={"risk_tolerance": "aggressive"})

    assert response.status_code == 200
    data = response.json()
    assert (data["stocks"], data["bonds"], data["cash"]) == (80, 15, 5)
    assert "aggressive" in data["description"]


def test_simple_allocation_endpoint_rejects_unknown_tolerance(client: TestClient):
    response = client.post("/v1/allocation/simple", json={"risk_tolerance": "yolo"})
    assert response.status_code == 422


def test_portfolio_endpoint(client: TestClient):
    """Test POST /v1/portfolio values holdings and groups them by type"""
    response = client.post(
        "/v1/portfolio",
        json={
            "holdings": [
                {
                    "symbol": "aapl",
                    "shares": 10,
                    "purchase_price": 100,
                    "current_price": 150,
                    "investment_type": "stock",
                },
                {"symbol": "bnd", "shares": 20, "purchase_price": 50, "investment_type": "bond"},
            ]
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total_investments"] == 2
    assert data["performance"]["total_value"] == pytest.approx(2500)
    assert data["performance"]["total_gain"] == pytest.approx(500)
    assert data["performance"]["diversification_score"] == pytest.approx(20)
    assert data["allocation_by_type"] == {"stock": 1500, "bond": 1000}


def test_portfolio_endpoint_empty(client: TestClient):
    data = client.post("/v1/portfolio", json={"holdings": []}).json()

    assert data["performance"]["total_value"] == 0
    assert data["allocation_by_type"] == {}


def test_goal_projection_endpoint(client: TestClient):
    """Test POST /v1/goals/projection with the needed contribution"""
    response = client.post(
        "/v1/goals/projection",
        json={
            "current_amount": 0,
            "target_amount": 12000,
            "years_to_goal": 1,
            "expected_return": 0,
            "as_of": "2024-06-15",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["monthly_contribution_needed"] == pytest.approx(1000)
    assert data["projection"]["on_track"] is True
    assert data["projection"]["years_to_target"] == pytest.approx(1.0)
    assert data["projection"]["projected_completion"] == "2025-06-15"


def test_goal_projection_endpoint_with_small_contribution(client: TestClient):
    """Test a contribution too small to reach the goal within 50 years"""
    response = client.post(
        "/v1/goals/projection",
        json={
            "current_amount": 0,
            "target_amount": 1_000_000,
            "years_to_goal": 10,
            "expected_return": 0,
            "monthly_contribution": 100,
            "as_of": "2024-06-15",
        },
    )

    data = response.json()
    assert data["projection"]["on_track"] is False
    assert data["projection"]["years_to_target"] == 50


@pytest.mark.parametrize(
    "years_to_goal, expected_return",
    [(1500, 0.5), (10, 1.5), (10, -1), (10, -30)],
)
def test_goal_projection_endpoint_rejects_out_of_range_inputs(
    client: TestClient, years_to_goal: float, expected_return: float
):
    """Test horizons past 100 years and returns outside (-100%, 100%] fail validation"""
    response = client.post(
        "/v1/goals/projection",
        json={
            "current_amount": 1000,
            "target_amount": 5000,
            "years_to_goal": years_to_goal,
            "expected_return": expected_return,
        },
    )
    assert response.status_code == 422


def test_goal_projection_endpoint_long_horizon_high_return(client: TestClient):
    """Test the largest accepted horizon and return still produce a projection"""
    response = client.post(
        "/v1/goals/projection",
        json={
            "current_amount": 1000,
            "target_amount": 5000,
            "years_to_goal": 100,
            "expected_return": 1,
            "as_of": "2024-06-15",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["monthly_contribution_needed"] == 0
    assert data["projection"]["on_track"] is True


def test_create_app_configures_json_logging():
    """Test the factory installs the JSON handler at the requested level"""
    create_app(log_level="WARNING")

    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert any(isinstance(h.formatter, CustomJsonFormatter) for h in root.handlers)

    create_app()
    assert logging.getLogger().level == logging.getLevelName(settings.log_level)
