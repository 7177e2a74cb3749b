import os, sys
import datetime as dt
import pytest
from fastapi.testclient import TestClient

# Ensure the backend root is importable without an editable install
backend_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if backend_root not in sys.path:
    sys.path.insert(0, backend_root)

from event_editor.config import EditorSettings  # noqa: E402
from event_editor.domain.models import Event, User  # noqa: E402
from event_editor.main import create_app  # noqa: E402
from event_editor.repositories.event_repository import MemoryEventStore  # noqa: E402
from event_editor.services.workflow_controller import WorkflowController  # noqa: E402

TODAY = dt.date(2024, 5, 20)


class FakeSurface:
    """Records every call the controller makes on the rendering surface."""

    def __init__(self, confirm_answer: bool = True):
        self.calls = []
        self.confirm_answer = confirm_answer
        self.visible = False
        self.view = None
        self.error = None

    def show(self, view):
        self.calls.append(("show", view))
        self.visible = view.visible
        self.view = view

    def hide(self):
        self.calls.append(("hide",))
        self.visible = False
        self.view = None

    def focus(self, field):
        self.calls.append(("focus", field))

    def show_error(self, message):
        self.calls.append(("show_error", message))
        self.error = message

    def clear_error(self):
        self.calls.append(("clear_error",))
        self.error = None

    def show_message(self, message):
        self.calls.append(("show_message", message))

    def notify_success(self, message):
        self.calls.append(("notify_success", message))

    def confirm(self, message):
        self.calls.append(("confirm", message))
        return self.confirm_answer

    def named(self, name):
        return [c for c in self.calls if c[0] == name]


class FakeHost:
    def __init__(self, user=None):
        self.user = user
        self.refreshes = 0

    @property
    def current_user(self):
        return self.user

    def refresh_calendar(self):
        self.refreshes += 1


def make_event(event_id="e1", **overrides) -> Event:
    values = dict(id=event_id, title="Old", description="", date=dt.date(2024, 6, 1), duration_minutes=60, color="#007bff")
    values.update(overrides)
    return Event(**values)


@pytest.fixture
def settings():
    return EditorSettings()


@pytest.fixture
def surface():
    return FakeSurface()


@pytest.fixture
def host():
    return FakeHost(user=User(id="u1", name="Ada"))


@pytest.fixture
def store(host):
    return MemoryEventStore(user_provider=lambda: host.current_user, events=[make_event("e1")])


@pytest.fixture
def controller(host, store, surface, settings):
    return WorkflowController(host, store, surface, settings=settings, today=lambda: TODAY)


@pytest.fixture(scope="function")
def client():
    # Fresh app and in-memory store per test
    store = MemoryEventStore(events=[make_event("e1")])
    app = create_app(EditorSettings(), store=store)
    return TestClient(app)
