"""Tests for p4edit.workspace.registry module."""

from pathlib import Path

from p4edit.core.types import WorkspaceState
from p4edit.workspace.registry import WorkspaceRegistry


class TestWorkspaceRegistry:
    """Tests for WorkspaceRegistry class."""

    def test_starts_empty(self, registry: WorkspaceRegistry) -> None:
        """Test empty registry."""
        assert registry.roots == []
        assert registry.bindings == {}

    def test_add_root_normalizes(self, registry: WorkspaceRegistry, temp_dir: Path) -> None:
        """Test that roots are stored as absolute paths."""
        root = registry.add_root(str(temp_dir / "ws" / "."))
        assert root == temp_dir / "ws"
        assert registry.roots == [temp_dir / "ws"]
        assert registry.state(root) is WorkspaceState.UNRESOLVED

    def test_add_root_twice(self, registry: WorkspaceRegistry, temp_dir: Path) -> None:
        """Test that adding a root twice keeps one entry."""
        registry.add_root(temp_dir)
        registry.add_root(temp_dir)
        assert registry.roots == [temp_dir]

    def test_find_root(self, registry: WorkspaceRegistry, temp_dir: Path) -> None:
        """Test finding the root of a file."""
        registry.add_root(temp_dir / "ws")
        assert registry.find_root(temp_dir / "ws" / "src" / "main.c") == temp_dir / "ws"
        assert registry.find_root(temp_dir / "other") is None

    def test_find_root_prefers_deepest(
        self, registry: WorkspaceRegistry, temp_dir: Path
    ) -> None:
        """Test that the deepest containing root wins."""
        registry.add_root(temp_dir)
        registry.add_root(temp_dir / "ws" / "nested")

        assert registry.find_root(temp_dir / "ws" / "nested" / "a.c") == (
            temp_dir / "ws" / "nested"
        )
        assert registry.find_root(temp_dir / "ws" / "b.c") == temp_dir

    def test_bind(self, registry: WorkspaceRegistry, temp_dir: Path) -> None:
        """Test binding a client."""
        registry.add_root(temp_dir)
        registry.bind(temp_dir, "bob-ws")

        assert registry.get_client(temp_dir) == "bob-ws"
        assert registry.client_for(temp_dir / "src" / "a.c") == "bob-ws"
        assert registry.state(temp_dir) is WorkspaceState.BOUND
        assert registry.bindings == {temp_dir: "bob-ws"}

    def test_client_for_outside_roots(
        self, registry: WorkspaceRegistry, temp_dir: Path
    ) -> None:
        """Test client lookup outside every root."""
        assert registry.client_for(temp_dir / "a.c") is None

    def test_remove_root_keeps_binding(
        self, registry: WorkspaceRegistry, temp_dir: Path
    ) -> None:
        """Test that removing a root keeps its binding."""
        registry.add_root(temp_dir)
        registry.bind(temp_dir, "bob-ws")

        registry.remove_root(temp_dir)

        assert registry.roots == []
        assert registry.find_root(temp_dir / "a.c") is None
        assert registry.get_client(temp_dir) == "bob-ws"

    def test_set_state(self, registry: WorkspaceRegistry, temp_dir: Path) -> None:
        """Test setting root state."""
        registry.set_state(temp_dir, WorkspaceState.FAILED)
        assert registry.state(temp_dir) is WorkspaceState.FAILED

    def test_unknown_root_state(self, registry: WorkspaceRegistry, temp_dir: Path) -> None:
        """Test state of an unknown root."""
        assert registry.state(temp_dir / "nowhere") is WorkspaceState.UNRESOLVED

    def test_clear_failure(self, registry: WorkspaceRegistry, temp_dir: Path) -> None:
        """Test that clearing a failure resets only failed roots."""
        failed = registry.add_root(temp_dir / "failed")
        bound = registry.add_root(temp_dir / "bound")
        registry.set_state(failed, WorkspaceState.FAILED)
        registry.bind(bound, "ws")

        registry.clear_failure(failed)
        registry.clear_failure(bound)

        assert registry.state(failed) is WorkspaceState.UNRESOLVED
        assert registry.state(bound) is WorkspaceState.BOUND
