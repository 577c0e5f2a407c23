from types import SimpleNamespace
from unittest.mock import patch

from auth import OAuthStart
from infrastructure.settings import BackendSettings
from use_cases.session_models import CookieUpdate
from views import login_view

GATE = SimpleNamespace(
    configured=True,
    settings=BackendSettings(supabase_url="https://example.supabase.co", supabase_anon_key="anon"),
)


@patch("views.login_view.session_manager.navigate_external")
@patch("views.login_view.session_manager.write_browser_cookies")
@patch("views.login_view.time.sleep")
@patch("views.login_view.auth.start_oauth_sign_in")
@patch("streamlit.button", return_value=True)
def test_provider_sign_in_opens_in_same_tab(mock_button, mock_start, mock_sleep, mock_write, mock_navigate):
    verifier = CookieUpdate("sb-supabase-auth-token-code-verifier", "v", 600)
    mock_start.return_value = OAuthStart(url="https://provider/authorize", cookies=(verifier,))

    login_view._render_provider_link(GATE, signup_role="founder")

    assert mock_start.call_args[1]["signup_role"] == "founder"
    mock_write.assert_called_once_with((verifier,), secure=False)
    mock_navigate.assert_called_once_with("https://provider/authorize")
    assert mock_button.call_args[1]["width"] == "stretch"


@patch("views.login_view.session_manager.navigate_external")
@patch("views.login_view.auth.start_oauth_sign_in")
@patch("streamlit.button", return_value=False)
def test_sign_in_starts_only_on_click(mock_button, mock_start, mock_navigate):
    login_view._render_provider_link(GATE)
    mock_start.assert_not_called()
    mock_navigate.assert_not_called()
