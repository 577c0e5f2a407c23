from types import SimpleNamespace
from urllib.parse import urlparse
from unittest.mock import MagicMock, patch

import pytest

import auth
from infrastructure.session_resolver import ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE
from infrastructure.settings import BackendSettings
from infrastructure.supabase_client import RequestCookieStorage, cookie_name_for

SETTINGS = BackendSettings(
    supabase_url="https://example.supabase.co",
    supabase_anon_key="anon",
    site_url="https://community.example.com",
)
VERIFIER_KEY = "supabase.auth.token-code-verifier"


def session_response(user_id="user-1"):
    return SimpleNamespace(
        session=SimpleNamespace(
            access_token="access-1",
            refresh_token="refresh-1",
            expires_at=None,
            user=SimpleNamespace(id=user_id),
        )
    )


@pytest.mark.parametrize(
    "next_path,expected",
    [
        (None, "/"),
        ("/jobs", "/jobs"),
        ("/settings/profile?incomplete=true", "/settings/profile?incomplete=true"),
        ("https://evil.example.com/", "/"),
        ("//evil.example.com", "/"),
        ("jobs", "/"),
    ],
)
def test_safe_next_path(next_path, expected):
    assert auth.safe_next_path(next_path) == expected


def test_start_oauth_sign_in_records_verifier_cookie():
    def fake_create(settings, storage):
        client = MagicMock()

        def sign_in(credentials):
            storage.set_item(VERIFIER_KEY, "verifier-123")
            return SimpleNamespace(provider="google", url="https://example.supabase.co/auth/v1/authorize?x=1")

        client.auth.sign_in_with_oauth.side_effect = sign_in
        return client

    with patch("auth.create_request_client", side_effect=fake_create):
        start = auth.start_oauth_sign_in(SETTINGS, {}, signup_role="founder")

    assert start.url.startswith("https://example.supabase.co/auth/v1/authorize")
    assert [(c.name, c.value) for c in start.cookies] == [(cookie_name_for(VERIFIER_KEY), "verifier-123")]


def test_start_oauth_sign_in_passes_callback_url():
    client = MagicMock()
    client.auth.sign_in_with_oauth.return_value = SimpleNamespace(url="https://provider")
    with patch("auth.create_request_client", return_value=client):
        auth.start_oauth_sign_in(SETTINGS, {}, signup_role="recruiter", next_path="/jobs")

    credentials = client.auth.sign_in_with_oauth.call_args[0][0]
    assert credentials["provider"] == "google"
    redirect_to = credentials["options"]["redirect_to"]
    assert redirect_to.startswith("https://community.example.com/auth-callback?")
    assert "signup_role=recruiter" in redirect_to
    assert "next=%2Fjobs" in redirect_to


def test_oauth_redirect_lands_on_a_registered_page():
    from views import routes

    client = MagicMock()
    client.auth.sign_in_with_oauth.return_value = SimpleNamespace(url="https://provider")
    with patch("auth.create_request_client", return_value=client):
        auth.start_oauth_sign_in(SETTINGS, {}, signup_role="founder")

    redirect_to = client.auth.sign_in_with_oauth.call_args[0][0]["options"]["redirect_to"]
    slug = urlparse(redirect_to).path.strip("/")
    assert slug in {routes.url_path_for(r.path) for r in routes.ROUTES}
    assert routes.path_for_url_path(slug) == "/auth/callback"


def test_start_oauth_sign_in_rejects_admin_role():
    with pytest.raises(ValueError):
        auth.start_oauth_sign_in(SETTINGS, {}, signup_role="admin")


def test_callback_without_code_goes_to_login():
    result = auth.complete_auth_callback(SETTINGS, {}, None)
    assert result.target.startswith("/login?error=")
    assert result.cookies == ()


def test_callback_success_sets_session_cookies_and_clears_verifier():
    verifier_cookie = cookie_name_for(VERIFIER_KEY)

    def fake_create(settings, storage):
        client = MagicMock()

        def exchange(params):
            assert storage.get_item(VERIFIER_KEY) == "verifier-123"
            storage.remove_item(VERIFIER_KEY)
            return session_response()

        client.auth.exchange_code_for_session.side_effect = exchange
        return client

    with patch("auth.create_request_client", side_effect=fake_create):
        result = auth.complete_auth_callback(
            SETTINGS, {verifier_cookie: "verifier-123"}, "code-1", next_path="/directory"
        )

    assert result.target == "/directory"
    assert result.user_id == "user-1"
    cookies = {c.name: c.value for c in result.cookies}
    assert cookies[verifier_cookie] is None
    assert cookies[ACCESS_TOKEN_COOKIE] == "access-1"
    assert cookies[REFRESH_TOKEN_COOKIE] == "refresh-1"


def test_callback_rejects_external_next():
    client = MagicMock()
    client.auth.exchange_code_for_session.return_value = session_response()
    with patch("auth.create_request_client", return_value=client):
        result = auth.complete_auth_callback(SETTINGS, {}, "code-1", next_path="https://evil.example.com")
    assert result.target == "/"


def test_callback_exchange_error_goes_to_login():
    client = MagicMock()
    client.auth.exchange_code_for_session.side_effect = RuntimeError("invalid grant")
    with patch("auth.create_request_client", return_value=client):
        result = auth.complete_auth_callback(SETTINGS, {}, "bad-code")
    assert result.target == "/login?error=Could+not+authenticate+user"


@patch("auth.SupabaseProfileRepository")
def test_callback_assigns_signup_role(mock_repo_cls):
    client = MagicMock()
    client.auth.exchange_code_for_session.return_value = session_response("user-7")
    with patch("auth.create_request_client", return_value=client):
        auth.complete_auth_callback(SETTINGS, {}, "code-1", signup_role="founder")
    mock_repo_cls.return_value.assign_signup_role.assert_called_once_with("user-7", "founder")


@patch("auth.SupabaseProfileRepository")
def test_callback_ignores_unknown_signup_role(mock_repo_cls):
    client = MagicMock()
    client.auth.exchange_code_for_session.return_value = session_response()
    with patch("auth.create_request_client", return_value=client):
        auth.complete_auth_callback(SETTINGS, {}, "code-1", signup_role="admin")
    mock_repo_cls.assert_not_called()


def test_sign_out_clears_cookies_even_without_backend():
    updates = auth.sign_out(None, {ACCESS_TOKEN_COOKIE: "a"})
    assert {u.name for u in updates} == {ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE}
    assert all(u.value is None for u in updates)


def test_sign_out_revokes_session():
    client = MagicMock()
    client.auth.set_session.return_value = session_response()
    with patch("auth.create_request_client", return_value=client):
        auth.sign_out(SETTINGS, {ACCESS_TOKEN_COOKIE: "access-1", REFRESH_TOKEN_COOKIE: "refresh-1"})
    client.auth.sign_out.assert_called_once()


def test_request_cookie_storage_roundtrip():
    storage = RequestCookieStorage({cookie_name_for("k"): "v"}, max_age=60)
    assert storage.get_item("k") == "v"
    storage.set_item("other", "x")
    storage.remove_item("k")
    assert storage.get_item("k") is None
    updates = {u.name: u for u in storage.cookie_updates}
    assert updates[cookie_name_for("other")].max_age == 60
    assert updates[cookie_name_for("k")].is_deletion
