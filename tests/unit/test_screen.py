import pytest

from nextchat_ui.config.client import ClientConfig
from nextchat_ui.core.bootstrap import build_init_pipeline
from nextchat_ui.core.context import AppContext
from nextchat_ui.core.document import Document
from nextchat_ui.core.loop import BackgroundLoop
from nextchat_ui.core.orchestrator import RootOrchestrator
from nextchat_ui.core.registry import ViewDescriptor, ViewRegistry
from nextchat_ui.core.routing import SHELL_ROUTES
from nextchat_ui.services.access_store import AccessStore
from nextchat_ui.services.api_client import ClientApi
from nextchat_ui.services.config_store import AppConfig, ConfigStore
from nextchat_ui.services.mcp_controller import McpController
from nextchat_ui.services.tokens import TokenStore
from nextchat_ui.ui import screen
from nextchat_ui.ui.layout import document as document_layout
from nextchat_ui.ui.layout import window
from nextchat_ui.ui.screen import VIEWS, Screen, build_view_registry, font_url
from nextchat_ui.utils import errors

def test_font_url_depends_on_build_mode():
    family = "family=Noto%20Sans%3Awght%40300%3B400%3B700%3B900&display=swap"
    assert font_url("export") == f"https://fonts.googleapis.com/css2?{family}"
    assert font_url("standalone") == f"/google-fonts/css2?{family}"

def test_every_shell_route_has_a_view():
    assert set(SHELL_ROUTES.values()) <= set(VIEWS)

def test_registry_holds_every_view():
    registry = build_view_registry()
    assert sorted(registry.names()) == sorted(VIEWS)
    assert registry.descriptor("chat").placeholder.keywords == {"no_logo": True}
    assert registry.descriptor("sd").placeholder.keywords == {"no_logo": False}


class FakeSlot:
    def __init__(self, st):
        self._st = st
        self.cleared = False

    def container(self):
        return self._st.container()

    def empty(self):
        self.cleared = True


class FakeBlock:
    def __enter__(self): return self
    def __exit__(self, *exc): return False


class FakeSt:
    def __init__(self):
        self.html = []
        self.errors = []
        self.slots = []

    def markdown(self, text, unsafe_allow_html=False): self.html.append(text)
    def container(self): return FakeBlock()
    def empty(self):
        slot = FakeSlot(self)
        self.slots.append(slot)
        return slot
    def error(self, msg): self.errors.append(msg)
    def expander(self, label): return FakeBlock()
    def code(self, text): pass
    def button(self, label, key=None): return False
    def rerun(self): pass


class FakeLLM:
    async def models(self):
        return []


@pytest.fixture
def fake_st(monkeypatch):
    fake = FakeSt()
    for module in (screen, document_layout, window, errors):
        monkeypatch.setattr(module, "st", fake)
    monkeypatch.setattr(screen.auth, "render", lambda ctx, **_: fake.html.append("auth-page"))
    monkeypatch.setattr(screen.sidebar, "render", lambda ctx, visible: fake.html.append("sidebar"))
    return fake


@pytest.fixture
def runner():
    loop = BackgroundLoop(name="screen-test")
    yield loop
    loop.stop()


def _screen(runner, monkeypatch, activations):
    monkeypatch.delenv("ENABLE_MCP", raising=False)
    doc = Document(lang="en")
    ctx = AppContext(
        client=ClientConfig(build_mode="export"),
        config=ConfigStore(AppConfig(lang="ar", tight_border=True)),
        access=AccessStore(ClientConfig(build_mode="export")),
        mcp=McpController(),
        document=doc,
        tokens=TokenStore(doc),
        api_factory=lambda name: ClientApi(llm=FakeLLM()),
        runner=runner,
    )
    registry = ViewRegistry(
        ViewDescriptor(name, activate, placeholder=lambda: None) for name, activate in activations.items()
    )
    orch = RootOrchestrator(ctx, registry, build_init_pipeline(ctx))
    runner.run(orch.hydrate())
    return ctx, Screen(ctx, orch)


def _recording(rendered, name):
    async def activate():
        return lambda ctx, **props: rendered.append((name, props))
    return activate


@pytest.mark.parametrize("location", ["/auth", "/sd", "/sd-new", "/artifacts/42", "/chat"])
def test_layout_modifiers_reach_the_page_on_every_branch(location, fake_st, runner, monkeypatch):
    rendered = []
    activations = {n: _recording(rendered, n) for n in ("chat", "sd", "artifacts")}
    ctx, scr = _screen(runner, monkeypatch, activations)

    scr.render(location)

    page = fake_st.html[0]
    assert 'class="container rtl-screen tight-container"' in page
    assert document_layout.ROOT_RULES["rtl-screen"] in page
    assert document_layout.ROOT_RULES["tight-container"] in page
    assert fake_st.errors == []


def test_standalone_and_shell_branches(fake_st, runner, monkeypatch):
    rendered = []
    activations = {n: _recording(rendered, n) for n in ("chat", "sd", "artifacts")}
    ctx, scr = _screen(runner, monkeypatch, activations)

    scr.render("/artifacts/42")
    scr.render("/sd-new")
    scr.render("/artifacts")
    assert rendered == [("artifacts", {"artifact_id": "42"}), ("sd", {"path": "/sd-new"})]
    assert "sidebar" not in fake_st.html

    scr.render("/chat")
    assert rendered[-1] == ("chat", {})
    assert "sidebar" in fake_st.html


def test_failed_view_clears_its_placeholder(fake_st, runner, monkeypatch):
    async def broken():
        raise ImportError("module gone")
    ctx, scr = _screen(runner, monkeypatch, {"settings": broken})

    scr.render("/settings")

    assert fake_st.errors == ["Oops, something went wrong! See details below."]
    assert fake_st.slots and all(slot.cleared for slot in fake_st.slots)
