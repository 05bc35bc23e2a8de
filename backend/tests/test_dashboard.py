def test_importer_dashboard(client, importer, exporter, make_product, make_request, make_quote):
    headers, _ = importer
    exp_headers, _ = exporter
    p1 = make_product(headers)
    make_product(headers, name="Mouse sem fio")
    req = make_request(headers, p1["id"])
    make_quote(exp_headers, req["id"])
    make_quote(exp_headers, req["id"], price_per_unit_usd=2.20)

    r = client.get("/importer/dashboard", headers=headers)
    assert r.status_code == 200
    body = r.json()
    assert body["name"] == "Importadora Sul"
    assert body["total_products"] == 2
    assert body["quote_requests_sent"] == 1
    assert body["quotes_received"] == 2
    assert body["recent_requests"][0]["quotes_count"] == 2


def test_recent_requests_are_limited(client, importer, make_product, make_request):
    headers, _ = importer
    product = make_product(headers)
    ids = [make_request(headers, product["id"])["id"] for _ in range(7)]

    body = client.get("/importer/dashboard", headers=headers).json()
    assert body["quote_requests_sent"] == 7
    assert [r["id"] for r in body["recent_requests"]] == list(reversed(ids))[:5]


def test_exporter_dashboard(client, importer, exporter, make_product, make_request, make_quote):
    imp_headers, _ = importer
    exp_headers, _ = exporter
    product = make_product(imp_headers)
    answered = make_request(imp_headers, product["id"])
    make_request(imp_headers, product["id"])
    make_quote(exp_headers, answered["id"])

    r = client.get("/exporter/dashboard", headers=exp_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["name"] == "Shenzhen Trading"
    assert body["pending_requests"] == 1
    assert body["quotes_submitted"] == 1
    assert len(body["recent_requests"]) == 2


def test_dashboards_follow_role(client, importer, exporter):
    imp_headers, _ = importer
    exp_headers, _ = exporter
    r = client.get("/exporter/dashboard", headers=imp_headers, follow_redirects=False)
    assert r.headers["location"] == "/importer/dashboard"
    r = client.get("/importer/dashboard", headers=exp_headers, follow_redirects=False)
    assert r.headers["location"] == "/exporter/dashboard"
