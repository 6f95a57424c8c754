from conftest import auth, game


def test_set_and_list_profile_links(client, board):
    res = client.put('/api/boards/river-traders/player-profiles',
                     json={'playerName': 'Alice', 'assetUrl': 'https://cdn.example/alice.png'},
                     headers=auth())
    assert res.status_code == 200
    assert res.json() == {'success': True, 'playerName': 'Alice', 'assetUrl': 'https://cdn.example/alice.png'}

    # Replaces the previous link
    client.put('/api/boards/river-traders/player-profiles',
               json={'playerName': 'Alice', 'assetUrl': 'https://cdn.example/alice.mp4'}, headers=auth())
    client.put('/api/boards/river-traders/player-profiles',
               json={'playerName': 'Bob', 'assetUrl': 'https://cdn.example/bob.gif'}, headers=auth())

    links = client.get('/api/boards/river-traders/player-profiles').json()
    assert links == {
        'Alice': 'https://cdn.example/alice.mp4',
        'Bob': 'https://cdn.example/bob.gif',
    }


def test_profile_link_without_games_and_stats_without_link(client, board):
    client.post('/api/boards/river-traders/games', json=game(A=10, B=3), headers=auth())
    client.put('/api/boards/river-traders/player-profiles',
               json={'playerName': 'Ghost', 'assetUrl': 'https://cdn.example/ghost.png'}, headers=auth())

    assert set(client.get('/api/boards/river-traders/player-profiles').json()) == {'Ghost'}
    assert [r['name'] for r in client.get('/api/boards/river-traders/leaderboard').json()] == ['A', 'B']


def test_profile_link_requires_password(client, board):
    payload = {'playerName': 'Alice', 'assetUrl': 'https://cdn.example/alice.png'}
    assert client.put('/api/boards/river-traders/player-profiles', json=payload).status_code == 401
    assert client.put('/api/boards/river-traders/player-profiles', json=payload,
                      headers=auth('nope')).status_code == 401
    assert client.get('/api/boards/river-traders/player-profiles').json() == {}


def test_profile_link_validation(client, board):
    res = client.put('/api/boards/river-traders/player-profiles',
                     json={'playerName': ' ', 'assetUrl': 'https://cdn.example/x.png'}, headers=auth())
    assert res.status_code == 400
    res = client.put('/api/boards/river-traders/player-profiles',
                     json={'playerName': 'Alice', 'assetUrl': ''}, headers=auth())
    assert res.status_code == 400


def test_profile_links_unknown_board(client):
    assert client.get('/api/boards/missing/player-profiles').status_code == 404
    res = client.put('/api/boards/missing/player-profiles',
                     json={'playerName': 'Alice', 'assetUrl': 'https://cdn.example/x.png'}, headers=auth())
    assert res.status_code == 401


def test_single_link_lookup(run_services):
    from catan_boards.keyspace import KeySpace

    async def scenario(services):
        await services.boards.create('Solo', 'solo', 'pw')
        await services.profiles.set('solo', ' Alice ', 'https://cdn.example/a.webp', 'pw')
        keyspace = KeySpace.for_board('solo')
        return await services.profiles.get(keyspace, 'Alice'), await services.profiles.get(keyspace, 'Bob')

    alice, bob = run_services(scenario)
    assert alice == 'https://cdn.example/a.webp'
    assert bob is None
