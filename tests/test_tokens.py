from design_api.tokens import DEFAULT_RADIUS, DEFAULT_SPACING, DEFAULT_TYPOGRAPHY, normalize_tokens


def test_empty_tokens_get_every_default():
    tokens = normalize_tokens({})
    assert tokens.model_dump() == {
        "colors": [],
        "typography": DEFAULT_TYPOGRAPHY,
        "spacing": ["4px", "8px", "16px", "24px", "32px"],
        "animations": [],
        "elevation": [],
        "radius": ["4px", "8px", "12px"],
    }


def test_missing_spacing_uses_default_scale():
    tokens = normalize_tokens({"colors": [], "radius": ["2px"]})
    assert tokens.spacing == ["4px", "8px", "16px", "24px", "32px"]
    assert tokens.radius == ["2px"]


def test_falsy_and_mistyped_fields_fall_back():
    tokens = normalize_tokens({"spacing": None, "radius": "8px", "typography": "Inter", "colors": {}})
    assert tokens.spacing == DEFAULT_SPACING
    assert tokens.radius == DEFAULT_RADIUS
    assert tokens.typography.headings == DEFAULT_TYPOGRAPHY["headings"]
    assert tokens.colors == []


def test_empty_lists_from_model_are_kept():
    tokens = normalize_tokens({"spacing": [], "radius": [], "colors": [], "typography": {"weights": []}})
    assert tokens.spacing == []
    assert tokens.radius == []
    assert tokens.colors == []
    assert tokens.typography.weights == []


def test_list_with_only_unusable_items_falls_back():
    tokens = normalize_tokens({"spacing": [None, {"px": 4}], "radius": [True]})
    assert tokens.spacing == DEFAULT_SPACING
    assert tokens.radius == DEFAULT_RADIUS


def test_defaults_are_not_shared_between_results():
    first = normalize_tokens({})
    first.spacing.append("64px")
    assert normalize_tokens({}).spacing == DEFAULT_SPACING


def test_values_from_model_are_kept():
    tokens = normalize_tokens(
        {
            "colors": [{"name": "Ink", "hex": "#1F2121"}, {"name": "Paper", "hex": "#FFFBF0"}],
            "typography": {"headings": "Inter, 700", "body": "Inter, 400", "weights": ["400", "700"]},
            "spacing": ["2px", "6px"],
            "animations": ["fade-in 200ms ease-out"],
            "elevation": ["0 2px 8px rgba(0,0,0,0.08)"],
            "radius": ["12px"],
        }
    )
    assert [c.name for c in tokens.colors] == ["Ink", "Paper"]
    assert tokens.typography.headings == "Inter, 700"
    assert tokens.animations == ["fade-in 200ms ease-out"]
    assert tokens.elevation == ["0 2px 8px rgba(0,0,0,0.08)"]


def test_partial_typography_is_completed():
    tokens = normalize_tokens({"typography": {"headings": "Playfair Display, 600"}})
    assert tokens.typography.headings == "Playfair Display, 600"
    assert tokens.typography.body == DEFAULT_TYPOGRAPHY["body"]
    assert tokens.typography.weights == ["400", "600"]


def test_numeric_weights_become_strings():
    tokens = normalize_tokens({"typography": {"headings": "A", "body": "B", "weights": [400, 600, "700"]}})
    assert tokens.typography.weights == ["400", "600", "700"]


def test_malformed_color_entries_are_dropped():
    tokens = normalize_tokens(
        {"colors": [{"name": "Primary", "hex": "#2BA8B8"}, {"hex": "#000000"}, "#FFFFFF", {"name": "Bad", "hex": 5}]}
    )
    assert [c.model_dump() for c in tokens.colors] == [{"name": "Primary", "hex": "#2BA8B8"}]
