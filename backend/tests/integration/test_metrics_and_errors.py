def test_metrics_endpoint_exposes_prometheus_after_requests(client):
    # trigger a couple of requests
    r1 = client.get('/healthz')
    assert r1.status_code == 200
    r2 = client.post('/workflow/actions', json={'type': 'open'})
    assert r2.status_code == 200
    m = client.get('/metrics')
    assert m.status_code == 200
    body = m.text
    assert 'event_editor_requests_total' in body
    assert 'event_editor_workflow_actions_total' in body


def test_store_failure_is_reported_in_body_not_as_http_error(client):
    client.post('/workflow/actions', json={'type': 'open', 'eventId': 'e1'})
    client.app.state.store._events.clear()
    r = client.post('/workflow/actions', json={'type': 'submit', 'form': {'title': 'Gone', 'date': '2024-06-01'}})
    assert r.status_code == 200
    data = r.json()
    assert data['outcome'] == 'failed'
    assert data['error']['code'] == 'EVENT_NOT_FOUND'
    assert data['surface']['error'] == 'Event not found'
    assert data['mode'] == 'editing'
