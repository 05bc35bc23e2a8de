import pytest

from models.simulation import QuoteCostSimulation


@pytest.fixture
def quote(importer, exporter, make_product, make_request, make_quote):
    imp_headers, _ = importer
    exp_headers, _ = exporter
    product = make_product(imp_headers)
    req = make_request(imp_headers, product["id"])
    return make_quote(exp_headers, req["id"], price_per_unit_usd=2.50, moq=1000)


def _run(client, headers, quote_id, **overrides):
    payload = {
        "quantity": 1000, "freight_usd": 300, "insurance_usd": 50,
        "other_costs_usd": 0, "tax_rate_percent": 10, "exchange_rate": 5.00,
    }
    payload.update(overrides)
    return client.post(f"/importer/quotes/{quote_id}/simulate", headers=headers, json=payload)


def test_simulation_view_defaults(client, importer, quote):
    headers, _ = importer
    r = client.get(f"/importer/quotes/{quote['id']}/simulate", headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert body["quote"]["factory_name"] == "Shenzhen Audio Factory"
    assert body["defaults"]["quantity"] == 1000
    assert body["defaults"]["exchange_rate"] == 5.0
    assert body["history"] == []


def test_simulation_result_is_stored(client, importer, quote, db_session):
    headers, _ = importer
    r = _run(client, headers, quote["id"])
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["estimated_total_cost_usd"] == pytest.approx(3135.00)
    assert body["estimated_total_cost_brl"] == pytest.approx(15675.00)
    assert body["estimated_unit_cost_usd"] == pytest.approx(3.135)
    assert body["estimated_unit_cost_brl"] == pytest.approx(15.675)
    assert body["below_moq"] is False

    assert db_session.query(QuoteCostSimulation).count() == 1


def test_history_is_newest_first(client, importer, quote):
    headers, _ = importer
    first = _run(client, headers, quote["id"], quantity=1000).json()
    second = _run(client, headers, quote["id"], quantity=2000).json()

    history = client.get(f"/importer/quotes/{quote['id']}/simulate", headers=headers).json()["history"]
    assert [h["id"] for h in history] == [second["id"], first["id"]]


def test_quantity_below_moq_is_flagged(client, importer, quote):
    headers, _ = importer
    r = _run(client, headers, quote["id"], quantity=10)
    assert r.status_code == 201
    assert r.json()["below_moq"] is True


@pytest.mark.parametrize(
    "overrides",
    [{"quantity": 0}, {"freight_usd": -1}, {"tax_rate_percent": -5}, {"exchange_rate": 0}],
)
def test_invalid_parameters_are_rejected(client, importer, quote, db_session, overrides):
    headers, _ = importer
    r = _run(client, headers, quote["id"], **overrides)
    assert r.status_code == 422
    assert db_session.query(QuoteCostSimulation).count() == 0


def test_other_importer_cannot_simulate(client, signup, quote):
    other, _ = signup("other@example.com")
    assert client.get(f"/importer/quotes/{quote['id']}/simulate", headers=other).status_code == 404
    assert _run(client, other, quote["id"]).status_code == 404


def test_exchange_rate_defaults_from_settings(client, importer, quote):
    headers, _ = importer
    r = client.post(f"/importer/quotes/{quote['id']}/simulate", headers=headers, json={"quantity": 1000})
    assert r.status_code == 201, r.text
    assert r.json()["exchange_rate"] == 5.0
    assert r.json()["estimated_total_cost_brl"] == pytest.approx(12500.0)


def test_history_survives_quote_update(client, importer, exporter, quote, db_session):
    headers, _ = importer
    exp_headers, _ = exporter
    first = _run(client, headers, quote["id"]).json()

    r = client.put(f"/exporter/quotes/{quote['id']}", headers=exp_headers, json={
        "factory_name": "Shenzhen Audio Factory", "price_per_unit_usd": 1.99, "moq": 500,
    })
    assert r.status_code == 200

    history = client.get(f"/importer/quotes/{quote['id']}/simulate", headers=headers).json()["history"]
    assert [h["id"] for h in history] == [first["id"]]
    assert history[0]["estimated_total_cost_usd"] == pytest.approx(3135.00)


def test_quote_with_history_cannot_be_deleted(client, importer, exporter, quote, db_session):
    headers, _ = importer
    exp_headers, _ = exporter
    _run(client, headers, quote["id"])

    r = client.delete(f"/exporter/quotes/{quote['id']}", headers=exp_headers)
    assert r.status_code == 409

    assert db_session.query(QuoteCostSimulation).filter(QuoteCostSimulation.quote_id == quote["id"]).count() == 1
    assert client.get(f"/importer/quotes/{quote['id']}/simulate", headers=headers).status_code == 200
