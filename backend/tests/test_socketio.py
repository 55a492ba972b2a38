def _score_updates(sio_client):
    return [pkt['args'][0] for pkt in sio_client.get_received('/ws') if pkt['name'] == 'updateScore']


def test_socket_connect_registers_viewer(flask_app, sio_client):
    assert sio_client.is_connected('/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'connected' for pkt in received)
    assert len(flask_app.extensions['score_broadcaster'].viewers) == 1

    sio_client.emit('ping', {'n': 1}, namespace='/ws')
    assert any(pkt['name'] == 'pong' for pkt in sio_client.get_received('/ws'))

    sio_client.disconnect(namespace='/ws')
    assert flask_app.extensions['score_broadcaster'].viewers == set()


def test_roster_change_is_pushed(client, sio_client, register_user):
    alice, alice_h = register_user('alice')
    bob, bob_h = register_user('bob')
    sio_client.get_received('/ws')  # flush

    game = client.post('/api/games', json={'name': 'Maze'}, headers=alice_h).get_json()
    updates = _score_updates(sio_client)
    assert updates == [{'id': game['id'], 'players': [{'user': {'id': alice['id'], 'username': 'alice'}, 'xp': 0}]}]

    client.post(f"/api/games/{game['id']}", headers=bob_h)
    updates = _score_updates(sio_client)
    assert [p['user']['username'] for p in updates[-1]['players']] == ['alice', 'bob']


def test_every_viewer_receives_updates(flask_app, client, sio_client, register_user):
    from arcade import socketio
    second = socketio.test_client(flask_app, namespace='/ws')
    _, alice_h = register_user('alice')
    sio_client.get_received('/ws')
    second.get_received('/ws')

    client.post('/api/games', json={'name': 'Maze'}, headers=alice_h)
    assert len(_score_updates(sio_client)) == 1
    assert len(_score_updates(second)) == 1
    second.disconnect(namespace='/ws')


def test_match_activity_only_pushes_on_stop(client, sio_client, match_setup):
    g = match_setup
    mid = g.match['id']
    sio_client.get_received('/ws')  # flush game setup updates
    client.post(f'/api/matches/{mid}', json={'secret': 's1'}, headers=g.bob_h)
    client.post(f'/api/matches/{mid}/play', json={'item': 'ghost', 'player_id': g.bob['id']}, headers=g.bob_h)
    # joins and plays do not touch the game roster
    assert _score_updates(sio_client) == []

    client.get(f'/api/matches/{mid}/stop')
    updates = _score_updates(sio_client)
    assert updates
    final = {p['user']['username']: p['xp'] for p in updates[-1]['players']}
    assert final == {'alice': 0, 'bob': 300}


def test_failed_request_publishes_nothing(client, sio_client, game_with_players):
    g = game_with_players
    sio_client.get_received('/ws')
    assert client.post(f"/api/games/{g.game['id']}", headers=g.bob_h).status_code == 400
    assert _score_updates(sio_client) == []


def test_stopped_broadcaster_is_silent(flask_app, client, sio_client, register_user):
    _, alice_h = register_user('alice')
    sio_client.get_received('/ws')
    broadcaster = flask_app.extensions['score_broadcaster']
    broadcaster.stop()
    assert not broadcaster.running

    client.post('/api/games', json={'name': 'Maze'}, headers=alice_h)
    assert _score_updates(sio_client) == []


def test_failed_push_does_not_fail_the_request(flask_app, client, sio_client, register_user, monkeypatch):
    _, alice_h = register_user('alice')
    sio_client.get_received('/ws')
    broadcaster = flask_app.extensions['score_broadcaster']

    def broken_snapshot(reader, game_id):
        raise RuntimeError('socket layer down')

    monkeypatch.setattr(broadcaster, 'snapshot', broken_snapshot)
    res = client.post('/api/games', json={'name': 'Maze'}, headers=alice_h)
    assert res.status_code == 201
    assert _score_updates(sio_client) == []

    monkeypatch.undo()
    listed = client.get('/api/games', headers=alice_h).get_json()
    assert [game['name'] for game in listed] == ['Maze']
