"""Tests for group name resolution."""

from retakes_spawns.spawns import GroupResolver


class TestGroupResolver:

    def setup_method(self):
        self.resolver = GroupResolver(["Long A", "Long B", "Short"])

    def test_exact_name_case_insensitive(self):
        assert self.resolver.resolve("long a") == "long-a"
        assert self.resolver.resolve("  SHORT ") == "short"

    def test_exact_slug(self):
        assert self.resolver.resolve("long-a") == "long-a"
        assert self.resolver.resolve("LONG_B") == "long-b"

    def test_ambiguous_prefix_fails(self):
        assert self.resolver.resolve("lo") is None
        assert self.resolver.resolve("Long") is None

    def test_unique_prefix(self):
        assert self.resolver.resolve("sh") == "short"
        assert self.resolver.resolve("long-b") == "long-b"

    def test_unknown_and_blank(self):
        assert self.resolver.resolve("mid") is None
        assert self.resolver.resolve("   ") is None
        assert GroupResolver([]).resolve("Long A") is None

    def test_single_group_blank_slug_input_does_not_match(self):
        assert GroupResolver(["Connector"]).resolve("??") is None

    def test_display_name(self):
        assert self.resolver.display_name("long-b") == "Long B"
        assert self.resolver.display_name("mid") is None
        assert self.resolver.resolve_name("lONG a") == "Long A"
        assert self.resolver.resolve_name("lo") is None


class TestSharedSlug:

    def setup_method(self):
        self.resolver = GroupResolver(["Long A", "Long-A", "Short"])

    def test_exact_name_picks_its_own_group(self):
        assert self.resolver.resolve_name("Long-A") == "Long-A"
        assert self.resolver.resolve_name("long a") == "Long A"

    def test_slug_shared_by_two_groups_is_ambiguous(self):
        assert self.resolver.resolve_name("LONG_A") is None
        assert self.resolver.resolve("LONG_A") is None
        assert self.resolver.display_name("long-a") is None
        assert self.resolver.display_name("short") == "Short"
