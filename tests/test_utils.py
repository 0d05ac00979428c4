"""Unit tests for utility functions (solid_scaffold.utils).

Tests cover:
- studly / camel / snake / kebab casing
- class_name_to_title
- pluralize (regular, suffix rules, irregular, uncountable, compound names)
- Rich output helpers
"""

from __future__ import annotations

import pytest

from solid_scaffold.utils import (
    camel,
    class_name_to_title,
    kebab,
    pluralize,
    print_error,
    print_info,
    print_success,
    print_warning,
    snake,
    studly,
)


# ---------------------------------------------------------------------------
# Casing
# ---------------------------------------------------------------------------


class TestCasing:
    @pytest.mark.unit
    def test_studly_from_snake(self):
        assert studly("user_profile") == "UserProfile"

    @pytest.mark.unit
    def test_studly_keeps_pascal(self):
        assert studly("UserProfile") == "UserProfile"

    @pytest.mark.unit
    def test_camel(self):
        assert camel("UserProfile") == "userProfile"
        assert camel("Post") == "post"

    @pytest.mark.unit
    def test_camel_empty(self):
        assert camel("") == ""

    @pytest.mark.unit
    def test_snake(self):
        assert snake("UserProfiles") == "user_profiles"
        assert snake("Post") == "post"

    @pytest.mark.unit
    def test_snake_already_lower(self):
        assert snake("posts") == "posts"

    @pytest.mark.unit
    def test_snake_splits_acronyms(self):
        assert snake("HTTPLog") == "h_t_t_p_log"

    @pytest.mark.unit
    def test_kebab(self):
        assert kebab("UserProfiles") == "user-profiles"
        assert kebab("BlogPostComments") == "blog-post-comments"

    @pytest.mark.unit
    def test_class_name_to_title(self):
        assert class_name_to_title("UserProfile") == "User Profile"
        assert class_name_to_title("Post") == "Post"
        assert class_name_to_title("BlogPostComments") == "Blog Post Comments"


# ---------------------------------------------------------------------------
# Pluralisation
# ---------------------------------------------------------------------------


class TestPluralize:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("singular", "plural"),
        [
            ("Post", "Posts"),
            ("Category", "Categories"),
            ("Box", "Boxes"),
            ("Address", "Addresses"),
            ("Status", "Statuses"),
            ("Day", "Days"),
            ("Knife", "Knives"),
            ("Wolf", "Wolves"),
            ("Analysis", "Analyses"),
            ("Quiz", "Quizzes"),
            ("Matrix", "Matrices"),
        ],
    )
    def test_suffix_rules(self, singular, plural):
        assert pluralize(singular) == plural

    @pytest.mark.unit
    def test_irregular(self):
        assert pluralize("Person") == "People"
        assert pluralize("Child") == "Children"

    @pytest.mark.unit
    def test_uncountable(self):
        assert pluralize("Equipment") == "Equipment"
        assert pluralize("Sheep") == "Sheep"

    @pytest.mark.unit
    def test_only_last_word_inflected(self):
        assert pluralize("UserProfile") == "UserProfiles"
        assert pluralize("ProductCategory") == "ProductCategories"
        assert pluralize("SalesPerson") == "SalesPeople"

    @pytest.mark.unit
    def test_lowercase_input(self):
        assert pluralize("post") == "posts"

    @pytest.mark.unit
    def test_empty(self):
        assert pluralize("") == ""


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestRichHelpers:
    @pytest.mark.unit
    def test_print_success(self):
        print_success("Post.php created")

    @pytest.mark.unit
    def test_print_error(self):
        print_error("Something failed")

    @pytest.mark.unit
    def test_print_warning_with_brackets(self):
        print_warning("Could not read table posts: [parameters: ()]")

    @pytest.mark.unit
    def test_print_info(self):
        print_info("  (binding already exists)")
