import pytest

from nextchat_ui.config.client import ClientConfig
from nextchat_ui.core.routing import (
    ArtifactBranch, AuthBranch, ImageGenBranch, ShellBranch, dispatch, layout_for, normalize,
)

def test_artifact_route_takes_precedence():
    assert dispatch("/artifacts/abc123") == ArtifactBranch("abc123")
    assert dispatch("#/artifacts/abc123/") == ArtifactBranch("abc123")

def test_artifacts_without_id_is_standalone():
    assert dispatch("/artifacts") == ArtifactBranch(None)
    assert dispatch("/artifacts/") == ArtifactBranch(None)

def test_auth_and_image_gen():
    assert dispatch("/auth") == AuthBranch()
    assert dispatch("/sd") == ImageGenBranch("/sd")
    assert dispatch("/sd-new") == ImageGenBranch("/sd-new")

@pytest.mark.parametrize("location,view", [
    ("/", "chat"), ("/chat", "chat"), ("/settings", "settings"), ("/new-chat", "new-chat"),
    ("/masks", "masks"), ("/plugins", "plugins"), ("/search-chat", "search-chat"),
    ("/mcp-market", "mcp-market"), ("/nowhere", None),
])
def test_shell_routes(location, view):
    branch = dispatch(location)
    assert isinstance(branch, ShellBranch)
    assert branch.view == view

def test_sidebar_visible_only_on_home():
    assert dispatch("/").sidebar_visible is True
    assert dispatch("").sidebar_visible is True
    assert dispatch("/chat").sidebar_visible is False

def test_normalize():
    assert normalize("#/settings?x=1") == "/settings"
    assert normalize(None) == "/"
    assert normalize("chat/") == "/chat"

def test_layout_tight_border_and_rtl():
    web = ClientConfig()
    assert layout_for(web, True, "en", is_mobile=False).tight_border is True
    assert layout_for(web, True, "en", is_mobile=True).tight_border is False
    assert layout_for(ClientConfig(is_app=True), False, "en", is_mobile=True).tight_border is True
    layout = layout_for(web, False, "ar", is_mobile=False)
    assert layout.classes == {"container", "rtl-screen"}
