def _create(client, data):
    r = client.post('/workexperience', json=data)
    assert r.status_code == 201, r.text
    return r.json()['data']


def test_create_then_get_returns_same_record(client, record):
    r = client.post('/workexperience', json=record)
    assert r.status_code == 201
    body = r.json()
    assert body['success'] is True
    assert body['message'] == 'Work experience created successfully'
    created = body['data']
    assert isinstance(created['id'], int)
    assert created['companyName'] == 'Acme'
    assert created['endDate'] == '2021-06-30'
    assert created['createdAt']

    r2 = client.get(f"/workexperience/{created['id']}")
    assert r2.status_code == 200
    assert r2.json() == {'success': True, 'data': created}


def test_create_trims_values_and_stores_missing_end_date_as_null(client, record):
    payload = {k: f'  {v}  ' for k, v in record.items() if k not in ('endDate', 'startDate')}
    payload['startDate'] = '2019-03-01'
    created = _create(client, payload)
    assert created['companyName'] == 'Acme'
    assert created['description'] == 'Built internal tools'
    assert created['endDate'] is None

    blank_end = _create(client, {**record, 'endDate': '  '})
    assert blank_end['endDate'] is None


def test_create_rejects_invalid_body_with_every_error(client):
    r = client.post('/workexperience', json={'companyName': 'Acme', 'startDate': '2020/01/01'})
    assert r.status_code == 400
    body = r.json()
    assert body['error'] == 'Validation error'
    assert body['message'] == 'Please correct the following errors'
    assert body['details'] == [
        'Job title is required',
        'Location is required',
        'Description is required',
        'Start date must be in format YYYY-MM-DD',
    ]
    assert client.get('/workexperience').json()['count'] == 0


def test_ids_are_unique_and_not_reused_after_delete(client, record):
    first = _create(client, record)
    second = _create(client, record)
    assert first['id'] != second['id']
    assert client.delete(f"/workexperience/{second['id']}").status_code == 200
    third = _create(client, record)
    assert third['id'] not in (first['id'], second['id'])


def test_list_is_ordered_by_start_date_descending(client, record):
    for start in ('2019-05-01', '2022-01-01', '2020-12-31'):
        _create(client, {**record, 'startDate': start, 'endDate': None})
    r = client.get('/workexperience')
    assert r.status_code == 200
    body = r.json()
    assert body['success'] is True
    assert body['count'] == 3
    assert [row['startDate'] for row in body['data']] == ['2022-01-01', '2020-12-31', '2019-05-01']


def test_list_empty(client):
    assert client.get('/workexperience').json() == {'success': True, 'data': [], 'count': 0}


def test_update_replaces_every_field(client, record):
    created = _create(client, record)
    replacement = {
        'companyName': 'Globex',
        'jobTitle': 'Lead',
        'location': 'Stockholm',
        'startDate': '2022-02-01',
        'description': 'Led the platform team',
    }
    r = client.put(f"/workexperience/{created['id']}", json=replacement)
    assert r.status_code == 200
    body = r.json()
    assert body['message'] == 'Work experience updated successfully'
    updated = body['data']
    assert updated['id'] == created['id']
    assert updated['createdAt'] == created['createdAt']
    assert updated['companyName'] == 'Globex'
    assert updated['jobTitle'] == 'Lead'
    assert updated['location'] == 'Stockholm'
    assert updated['startDate'] == '2022-02-01'
    assert updated['description'] == 'Led the platform team'
    # omitted endDate clears the stored one
    assert updated['endDate'] is None
    assert client.get(f"/workexperience/{created['id']}").json()['data'] == updated


def test_update_requires_a_full_valid_body(client, record):
    created = _create(client, record)
    r = client.put(f"/workexperience/{created['id']}", json={'companyName': 'Only this'})
    assert r.status_code == 400
    assert len(r.json()['details']) == 4
    assert client.get(f"/workexperience/{created['id']}").json()['data'] == created


def test_update_checks_body_before_existence(client, record):
    assert client.put('/workexperience/999', json={}).status_code == 400
    r = client.put('/workexperience/999', json=record)
    assert r.status_code == 404
    assert r.json() == {'error': 'Not found', 'message': 'Work experience not found'}


def test_delete_returns_the_removed_record(client, record):
    created = _create(client, record)
    r = client.delete(f"/workexperience/{created['id']}")
    assert r.status_code == 200
    body = r.json()
    assert body['success'] is True
    assert body['message'] == 'Work experience deleted successfully'
    assert body['data'] == created
    assert client.get(f"/workexperience/{created['id']}").status_code == 404


def test_deleting_twice_is_not_found(client, record):
    created = _create(client, record)
    assert client.delete(f"/workexperience/{created['id']}").status_code == 200
    r = client.delete(f"/workexperience/{created['id']}")
    assert r.status_code == 404
    assert r.json()['error'] == 'Not found'


def test_non_numeric_id_is_a_client_error(client, record):
    for r in (
        client.get('/workexperience/abc'),
        client.put('/workexperience/abc', json=record),
        client.delete('/workexperience/abc'),
    ):
        assert r.status_code == 400
        assert r.json() == {'error': 'Invalid ID format', 'message': 'ID must be a number'}


def test_numeric_ids_without_a_row_are_not_found(client, record):
    created = _create(client, record)
    assert client.get(f"/workexperience/{created['id']}.0").status_code == 200
    assert client.get(f"/workexperience/{created['id']}e0").status_code == 200
    assert client.get(f"/workexperience/{hex(created['id'])}").status_code == 200
    for raw in ('1.5', '-1', '0', '99999999999999999999999', '1e3', '0x10', 'Infinity', '%20'):
        assert client.get(f'/workexperience/{raw}').status_code == 404


def test_routes_are_also_served_under_api_prefix(client, record):
    created = client.post('/api/workexperience', json=record).json()['data']
    r = client.get(f"/api/workexperience/{created['id']}")
    assert r.status_code == 200
    assert r.json()['data'] == created
    assert client.get('/api/workexperience').json()['count'] == 1


def test_form_bodies_and_lowercase_field_names(client, record):
    form = {
        'companyname': 'Initech',
        'jobtitle': 'Analyst',
        'location': 'Austin',
        'startdate': '2018-04-01',
        'enddate': '',
        'description': 'TPS reports',
    }
    r = client.post('/workexperience', data=form)
    assert r.status_code == 201
    data = r.json()['data']
    assert data['companyName'] == 'Initech'
    assert data['startDate'] == '2018-04-01'
    assert data['endDate'] is None


def test_root_describes_the_api(client):
    r = client.get('/')
    assert r.status_code == 200
    body = r.json()
    assert body['message'] == 'Work Experience API'
    assert body['version'] == '1.0.0'
    assert 'GET /workexperience' in body['endpoints']
    assert 'DELETE /workexperience/{id}' in body['endpoints']
