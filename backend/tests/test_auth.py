def test_index(client):
    res = client.get('/api/')
    assert res.status_code == 200
    assert res.get_json()['message'] == 'API Running'


def test_register_returns_token_and_user(client):
    res = client.post('/api/users', json={
        'username': 'pac', 'email': 'Pac@Example.com', 'password': 'wakawaka',
    })
    assert res.status_code == 201
    body = res.get_json()
    assert body['token']
    assert body['user']['username'] == 'pac'
    assert body['user']['email'] == 'pac@example.com'
    assert 'password_hash' not in body['user']


def test_register_duplicate_is_rejected(client, register_user):
    register_user('pac')
    res = client.post('/api/users', json={
        'username': 'pac', 'email': 'other@example.com', 'password': 'wakawaka',
    })
    assert res.status_code == 400
    assert res.get_json()['error'] == 'User already exists'


def test_register_reports_each_missing_field(client):
    res = client.post('/api/users', json={'username': '  '})
    assert res.status_code == 400
    params = {e['param'] for e in res.get_json()['errors']}
    assert params == {'username', 'email', 'password'}


def test_register_rejects_short_password(client):
    res = client.post('/api/users', json={
        'username': 'pac', 'email': 'pac@example.com', 'password': '123',
    })
    assert res.status_code == 400
    assert res.get_json()['errors'][0]['param'] == 'password'


def test_login_and_current_user(client, register_user):
    register_user('pac', password='wakawaka')
    res = client.post('/api/auth', json={'email': 'pac@example.com', 'password': 'wakawaka'})
    assert res.status_code == 200
    token = res.get_json()['token']

    me = client.get('/api/auth', headers={'Authorization': f'Bearer {token}'})
    assert me.status_code == 200
    assert me.get_json()['username'] == 'pac'


def test_login_wrong_password(client, register_user):
    register_user('pac', password='wakawaka')
    res = client.post('/api/auth', json={'email': 'pac@example.com', 'password': 'nope-nope'})
    assert res.status_code == 400
    assert res.get_json()['error'] == 'Invalid credentials'


def test_protected_route_requires_token(client):
    assert client.get('/api/auth').status_code == 401
    res = client.get('/api/matches', headers={'Authorization': 'Bearer not-a-token'})
    assert res.status_code == 401
    assert 'authorization denied' in res.get_json()['error']


def test_tokens_identify_their_own_user(client, register_user):
    _, alice_h = register_user('alice')
    _, bob_h = register_user('bob')
    assert client.get('/api/auth', headers=alice_h).get_json()['username'] == 'alice'
    assert client.get('/api/auth', headers=bob_h).get_json()['username'] == 'bob'


def test_register_rejects_non_string_fields(client):
    res = client.post('/api/users', json={'username': 5, 'email': 'pac@example.com', 'password': 'wakawaka'})
    assert res.status_code == 400
    assert [e['param'] for e in res.get_json()['errors']] == ['username']

    res = client.post('/api/users', json={'username': 'pac', 'email': ['pac@example.com'], 'password': 123456})
    assert res.status_code == 400
    assert {e['param'] for e in res.get_json()['errors']} == {'email', 'password'}


def test_login_rejects_non_string_fields(client, register_user):
    register_user('pac', password='wakawaka')
    res = client.post('/api/auth', json={'email': 5, 'password': 'wakawaka'})
    assert res.status_code == 400
    assert res.get_json()['errors'][0]['param'] == 'email'

    res = client.post('/api/auth', json=['pac@example.com', 'wakawaka'])
    assert res.status_code == 400
