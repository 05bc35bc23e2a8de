from models.quote_request import QuoteRequest


def _open_request(importer, make_product, make_request, **overrides):
    headers, _ = importer
    product = make_product(headers)
    return make_request(headers, product["id"], **overrides)


def test_exporter_sees_open_and_assigned_requests(client, importer, exporter, signup, make_product, make_request):
    imp_headers, _ = importer
    exp_headers, exp_profile = exporter
    _, other_profile = signup("ningbo@example.com", role="exporter")
    product = make_product(imp_headers)

    open_req = make_request(imp_headers, product["id"])
    mine = make_request(imp_headers, product["id"], assigned_to_id=exp_profile["id"])
    theirs = make_request(imp_headers, product["id"], assigned_to_id=other_profile["id"])

    r = client.get("/exporter/quote-requests", headers=exp_headers)
    assert r.status_code == 200
    assert [row["id"] for row in r.json()] == [mine["id"], open_req["id"]]
    assert r.json()[0]["requester"]["name"] == "Importadora Sul"

    assert client.get(f"/exporter/quote-requests/{theirs['id']}", headers=exp_headers).status_code == 404


def test_request_detail_for_exporter(client, importer, exporter, make_product, make_request, make_quote):
    exp_headers, _ = exporter
    req = _open_request(importer, make_product, make_request, notes="Embalagem individual")
    first = make_quote(exp_headers, req["id"], price_per_unit_usd=3.10)
    second = make_quote(exp_headers, req["id"], price_per_unit_usd=2.90)

    r = client.get(f"/exporter/quote-requests/{req['id']}", headers=exp_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["product"]["name"] == "Fone Bluetooth"
    assert body["requester"]["name"] == "Importadora Sul"
    assert [q["id"] for q in body["my_quotes"]] == [second["id"], first["id"]]


def test_submitting_quote_completes_request(client, importer, exporter, make_product, make_request, make_quote, db_session):
    exp_headers, exp_profile = exporter
    req = _open_request(importer, make_product, make_request)

    quote = make_quote(
        exp_headers, req["id"],
        factory_location="Shenzhen, Guangdong", incoterm="FOB", lead_time_days=30, remarks="  ",
    )
    assert quote["status"] == "submitted"
    assert quote["created_by_id"] == exp_profile["id"]
    assert quote["incoterm"] == "FOB"
    assert quote["remarks"] is None

    assert db_session.get(QuoteRequest, req["id"]).status.value == "completed"


def test_quote_validation(client, importer, exporter, make_product, make_request):
    exp_headers, _ = exporter
    req = _open_request(importer, make_product, make_request)
    url = f"/exporter/quote-requests/{req['id']}/quotes"

    assert client.post(url, headers=exp_headers, json={"factory_name": "F", "price_per_unit_usd": 0, "moq": 10}).status_code == 422
    assert client.post(url, headers=exp_headers, json={"factory_name": "F", "price_per_unit_usd": 1, "moq": 0}).status_code == 422
    assert client.post(url, headers=exp_headers, json={"factory_name": "F", "price_per_unit_usd": 1, "moq": 1, "incoterm": "XYZ"}).status_code == 422


def test_update_and_delete_own_quote(client, importer, exporter, make_product, make_request, make_quote):
    exp_headers, _ = exporter
    req = _open_request(importer, make_product, make_request)
    quote = make_quote(exp_headers, req["id"])

    r = client.put(f"/exporter/quotes/{quote['id']}", headers=exp_headers, json={
        "factory_name": "Shenzhen Audio Factory", "price_per_unit_usd": 2.35, "moq": 800,
    })
    assert r.status_code == 200
    assert r.json()["price_per_unit_usd"] == 2.35
    assert r.json()["moq"] == 800

    r = client.delete(f"/exporter/quotes/{quote['id']}", headers=exp_headers)
    assert r.status_code == 200
    detail = client.get(f"/exporter/quote-requests/{req['id']}", headers=exp_headers).json()
    assert detail["my_quotes"] == []


def test_cannot_touch_another_exporters_quote(client, importer, exporter, signup, make_product, make_request, make_quote):
    exp_headers, _ = exporter
    other_headers, _ = signup("ningbo@example.com", role="exporter")
    req = _open_request(importer, make_product, make_request)
    quote = make_quote(exp_headers, req["id"])

    payload = {"factory_name": "Hijack", "price_per_unit_usd": 0.01, "moq": 1}
    assert client.put(f"/exporter/quotes/{quote['id']}", headers=other_headers, json=payload).status_code == 404
    assert client.delete(f"/exporter/quotes/{quote['id']}", headers=other_headers).status_code == 404
