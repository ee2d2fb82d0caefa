"""
Tests for state definitions, state instances and token resolution.
"""

import gc
import logging

import pytest

from state_pattern import State, StateResolutionError, resolve_state


class Draft(State):
    """State with the default token."""

    def publish(self):
        return "published"

    def _normalize(self):
        return "private helpers are not handlers"


class Published(State):
    """State with a pinned token."""

    state_name = "article.published"

    def archive(self):
        pass

    class Reason:
        """Nested classes are not handlers."""


class Host:
    """Minimal stand-in for a stateful object."""

    def __init__(self):
        self.transitions = []

    def transition_to(self, state_class):
        self.transitions.append(state_class)


class TestStateIdentity:
    """Test state tokens and the handler set."""

    def test_default_state_name_is_dotted_path(self):
        """The default token is the module plus qualified class name."""
        assert Draft.state_name == f"{__name__}.Draft"

    def test_pinned_state_name_is_kept(self):
        """A state_name assigned in the class body is not overwritten."""
        assert Published.state_name == "article.published"

    def test_subclass_gets_its_own_state_name(self):
        """Subclasses of a pinned state get a fresh default token."""

        class Republished(Published):
            pass

        assert Republished.state_name.endswith("Republished")
        assert Published.state_name == "article.published"

    def test_state_name_available_on_instances(self):
        """Instances expose the class token."""
        assert Draft(Host()).state_name == Draft.state_name

    def test_handler_names_exclude_base_and_private(self):
        """Lifecycle hooks, accessors and private methods are not handlers."""
        assert Draft.handler_names() == frozenset({"publish"})

    def test_handler_names_skip_nested_classes(self):
        """Nested classes are not handlers."""
        assert Published.handler_names() == frozenset({"archive"})

    def test_base_state_has_no_handlers(self):
        """The base class declares no handlers."""
        assert State.handler_names() == frozenset()

    def test_inherited_handlers_are_included(self):
        """Handlers from an intermediate state base count."""

        class Base(State):
            def publish(self):
                raise NotImplementedError

        class Scheduled(Base):
            def reschedule(self):
                pass

        assert Scheduled.handler_names() == frozenset({"publish", "reschedule"})


class TestStateInstance:
    """Test construction and the lifecycle defaults."""

    def test_construction_binds_stateful_and_previous(self):
        """The constructor only stores its two references."""
        host = Host()
        first = Draft(host)
        second = Published(host, first)

        assert first.stateful is host
        assert first.previous_state is None
        assert second.previous_state is first

    def test_references_are_read_only(self):
        """State instances cannot be rebound after construction."""
        state = Draft(Host())

        with pytest.raises(AttributeError):
            state.stateful = Host()
        with pytest.raises(AttributeError):
            state.previous_state = None

    def test_construction_does_not_enter(self):
        """enter() is not called by the constructor."""

        class Counting(State):
            entered = 0

            def enter(self):
                Counting.entered += 1

        Counting(Host())
        assert Counting.entered == 0

    def test_default_hooks_are_no_ops(self):
        """enter() and exit() do nothing by default."""
        state = Draft(Host())
        assert state.enter() is None
        assert state.exit() is None

    def test_transition_to_forwards_to_stateful(self):
        """State.transition_to delegates to the owning object."""
        host = Host()
        Draft(host).transition_to(Published)

        assert host.transitions == [Published]

    def test_repr_names_state_and_owner(self):
        """repr shows the state and the owner class."""
        assert repr(Draft(Host())) == "<Draft of Host>"


class TestResolveState:
    """Test mapping tokens back to state classes."""

    def test_resolves_registered_token(self):
        """Default tokens resolve through the registry."""
        assert resolve_state(Draft.state_name) is Draft

    def test_resolves_pinned_token(self):
        """Pinned tokens resolve through the registry."""
        assert resolve_state("article.published") is Published

    def test_resolves_dotted_import_path(self):
        """Unregistered dotted paths are imported."""
        assert resolve_state(f"{__name__}.Published") is Published

    def test_unknown_token_raises(self):
        """A token naming nothing raises StateResolutionError."""
        with pytest.raises(StateResolutionError) as exc_info:
            resolve_state("no_such_module.Nowhere")

        assert exc_info.value.token == "no_such_module.Nowhere"

    def test_unknown_attribute_raises(self):
        """A token naming a missing attribute of a real module raises."""
        with pytest.raises(StateResolutionError):
            resolve_state(f"{__name__}.Missing")

    def test_non_state_raises(self):
        """A token naming something other than a State subclass raises."""
        with pytest.raises(StateResolutionError):
            resolve_state("os.path.join")
        with pytest.raises(StateResolutionError):
            resolve_state(f"{__name__}.Host")

    @pytest.mark.parametrize("token", [None, ""])
    def test_empty_token_raises(self, token):
        """Missing tokens raise."""
        with pytest.raises(StateResolutionError):
            resolve_state(token)

    def test_resolution_error_is_lookup_error(self):
        """StateResolutionError can be caught as LookupError."""
        with pytest.raises(LookupError):
            resolve_state("no_such_module.Nowhere")

    def test_reregistering_token_warns_and_replaces(self, caplog):
        """A second class claiming a token replaces the first, with a warning."""

        class First(State):
            state_name = "duplicated.token"

        with caplog.at_level(logging.WARNING, logger="state_pattern.state"):

            class Second(State):
                state_name = "duplicated.token"

        assert resolve_state("duplicated.token") is Second
        assert any("duplicated.token" in record.getMessage() for record in caplog.records)

    def test_collected_states_are_unregistered(self, caplog):
        """States built by a factory leave the registry once they are collected."""

        def build_state():
            class Built(State):
                def ping(self):
                    return "pong"

            return Built

        token = build_state().state_name
        gc.collect()

        with pytest.raises(StateResolutionError):
            resolve_state(token)

        with caplog.at_level(logging.WARNING, logger="state_pattern.state"):
            rebuilt = build_state()

        assert rebuilt.state_name == token
        assert resolve_state(token) is rebuilt
        assert not any(token in record.getMessage() for record in caplog.records)
