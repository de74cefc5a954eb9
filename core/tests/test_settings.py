from hospital.settings import env_list


def test_cors_origins_fall_back_to_older_variable(monkeypatch):
    monkeypatch.delenv('CORS_ALLOWED_ORIGINS', raising=False)
    monkeypatch.setenv('ALLOWED_ORIGINS', 'https://a.example, https://b.example')
    assert env_list('CORS_ALLOWED_ORIGINS', 'ALLOWED_ORIGINS', default='http://localhost:3000') == [
        'https://a.example', 'https://b.example',
    ]

    monkeypatch.setenv('CORS_ALLOWED_ORIGINS', 'https://c.example')
    assert env_list('CORS_ALLOWED_ORIGINS', 'ALLOWED_ORIGINS', default='x') == ['https://c.example']


def test_env_list_default(monkeypatch):
    monkeypatch.delenv('CORS_ALLOWED_ORIGINS', raising=False)
    monkeypatch.delenv('ALLOWED_ORIGINS', raising=False)
    assert env_list('CORS_ALLOWED_ORIGINS', 'ALLOWED_ORIGINS', default='http://localhost:3000') == [
        'http://localhost:3000',
    ]
