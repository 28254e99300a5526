"""Tests for weekly blueprint rendering."""

import copy

from mealprint.plan.blueprint import (
    BlueprintRenderer,
    ShoppingItem,
    ShoppingList,
    blueprint_servings,
    convert_blueprint_to_imperial,
    scale_factor,
)

# =============================================================================
# Shopping Item Parsing Tests
# =============================================================================


class TestShoppingItemParsing:
    """Tests for ShoppingItem.from_raw."""

    def test_string_format(self):
        """Test parsing the 'Item – quantity' string format."""
        item = ShoppingItem.from_raw("Chicken breast – 2.0 lbs")
        assert item.item == "Chicken breast"
        assert item.quantity == "2.0 lbs"
        assert item.bought is False

    def test_string_without_quantity(self):
        """Test a plain string with no separator."""
        item = ShoppingItem.from_raw("Bananas")
        assert item.item == "Bananas"
        assert item.quantity == ""

    def test_object_format(self):
        """Test parsing the object format."""
        item = ShoppingItem.from_raw(
            {"item": "Spinach", "quantity": "200g", "bought": True, "note": "baby leaves"}
        )
        assert item.item == "Spinach"
        assert item.quantity == "200g"
        assert item.bought is True
        assert item.note == "baby leaves"

    def test_quantity_embedded_in_name(self):
        """Test that a blank quantity is recovered from the item name."""
        item = ShoppingItem.from_raw({"item": "Lemons – 2 items", "quantity": ""})
        assert item.item == "Lemons"
        assert item.quantity == "2 items"

    def test_non_string_fields_ignored(self):
        """Test that malformed fields fall back to defaults."""
        item = ShoppingItem.from_raw({"item": "Eggs", "quantity": 12, "bought": "yes"})
        assert item.quantity == ""
        assert item.bought is False

    def test_unknown_type(self):
        """Test that other values are stringified."""
        assert ShoppingItem.from_raw(42).item == "42"

    def test_to_dict(self):
        """Test conversion to the object storage format."""
        item = ShoppingItem(item="Rice", quantity="1 kg")
        assert item.to_dict() == {"item": "Rice", "quantity": "1 kg", "bought": False, "note": None}


class TestShoppingList:
    """Tests for ShoppingList bookkeeping."""

    def test_counts_and_progress(self):
        """Test that totals and progress track added items."""
        shopping_list = ShoppingList()
        shopping_list.add_item("Produce", ShoppingItem(item="Kale", bought=True))
        shopping_list.add_item("Produce", ShoppingItem(item="Leeks"))
        assert shopping_list.total_items == 2
        assert shopping_list.bought_items == 1
        assert shopping_list.progress == 0.5

    def test_empty_progress(self):
        """Test progress of an empty list."""
        assert ShoppingList().progress == 0.0


# =============================================================================
# Serving Tests
# =============================================================================


class TestServings:
    """Tests for serving count and scale factor helpers."""

    def test_blueprint_servings(self, sample_blueprint):
        """Test reading the authored serving count."""
        assert blueprint_servings(sample_blueprint) == 4
        assert blueprint_servings({"servings": 2}) == 2

    def test_blueprint_servings_default(self):
        """Test the default when servings are missing or invalid."""
        assert blueprint_servings({}) == 4
        assert blueprint_servings({"servings": 0}) == 4
        assert blueprint_servings({"servings": "6"}) == 4
        assert blueprint_servings({"servings": True}) == 4

    def test_scale_factor(self):
        """Test the ratio of selected to authored servings."""
        assert scale_factor(8, 4) == 2.0
        assert scale_factor(2, 4) == 0.5
        assert scale_factor(2, 0) == 1.0

    def test_factor_without_selection(self, sample_blueprint):
        """Test that no selected servings means no scaling."""
        assert BlueprintRenderer().factor_for(sample_blueprint) == 1.0
        assert BlueprintRenderer(selected_servings=6).factor_for(sample_blueprint) == 1.5


# =============================================================================
# Shopping List Rendering Tests
# =============================================================================


class TestRenderShoppingList:
    """Tests for BlueprintRenderer.render_shopping_list."""

    def test_scaled_metric(self, sample_blueprint):
        """Test doubling servings without unit conversion."""
        rendered = BlueprintRenderer(selected_servings=8).render_shopping_list(sample_blueprint)

        produce = rendered.categories["Produce"]
        protein = rendered.categories["Protein"]
        assert produce[0].quantity == "400g"
        assert produce[1].item == "Lemons"
        assert produce[1].quantity == "4 items"
        assert protein[0].item == "Chicken breast"
        assert protein[0].quantity == "4 lbs"
        assert protein[1].item == "Salmon fillets 1000g"
        assert protein[1].quantity == ""

    def test_flags_and_counts_preserved(self, sample_blueprint):
        """Test that bought state, notes and counts survive rendering."""
        rendered = BlueprintRenderer(selected_servings=8).render_shopping_list(sample_blueprint)

        salmon = rendered.categories["Protein"][1]
        assert salmon.bought is True
        assert salmon.note == "wild"
        assert rendered.total_items == 4
        assert rendered.bought_items == 1

    def test_converted_to_imperial(self, sample_blueprint):
        """Test converting a metric blueprint at its authored servings."""
        rendered = BlueprintRenderer(use_imperial=True).render_shopping_list(sample_blueprint)

        assert rendered.categories["Produce"][0].quantity == "7.1 oz"
        assert rendered.categories["Protein"][0].quantity == "2.0 lbs"
        assert rendered.categories["Protein"][1].item == "Salmon fillets 1 lbs 2 oz"

    def test_scaled_then_converted(self, sample_blueprint):
        """Test that scaling happens before conversion."""
        renderer = BlueprintRenderer(selected_servings=8, use_imperial=True)
        rendered = renderer.render_shopping_list(sample_blueprint)

        # 400g
        assert rendered.categories["Produce"][0].quantity == "14.1 oz"
        # 1000g
        assert rendered.categories["Protein"][1].item == "Salmon fillets 2 lbs 3 oz"

    def test_imperial_blueprint_not_converted(self, imperial_blueprint):
        """Test that imperial blueprints are only scaled."""
        renderer = BlueprintRenderer(selected_servings=2, use_imperial=True)
        rendered = renderer.render_shopping_list(imperial_blueprint)
        assert rendered.categories["Pantry"][0].quantity == "1 lbs"

    def test_input_not_mutated(self, sample_blueprint):
        """Test that rendering leaves the blueprint untouched."""
        snapshot = copy.deepcopy(sample_blueprint)
        BlueprintRenderer(selected_servings=8, use_imperial=True).render_shopping_list(
            sample_blueprint
        )
        assert sample_blueprint == snapshot

    def test_missing_shopping_list(self):
        """Test rendering a blueprint without a shopping list."""
        rendered = BlueprintRenderer(selected_servings=2).render_shopping_list({})
        assert rendered.categories == {}
        assert rendered.total_items == 0


# =============================================================================
# Meal Rendering Tests
# =============================================================================


class TestRenderMeals:
    """Tests for BlueprintRenderer.render_meals."""

    def test_meal_order_and_names(self, sample_blueprint):
        """Test day naming and meal ordering."""
        days = BlueprintRenderer().render_meals(sample_blueprint)

        assert [day.day for day in days] == ["Monday", "Tuesday"]
        assert [meal.meal_type for meal in days[0].meals] == [
            "breakfast",
            "lunch",
            "dinner",
            "snack",
        ]
        assert days[0].meals[0].name == "Overnight oats"
        assert days[1].meals[0].name == "Scrambled eggs"

    def test_scaled_ingredients(self, sample_blueprint):
        """Test scaling the leading quantity of each ingredient line."""
        days = BlueprintRenderer(selected_servings=8).render_meals(sample_blueprint)

        breakfast, lunch, dinner, snack = days[0].meals
        assert breakfast.ingredients == ["160 g oats", "500 ml milk"]
        assert lunch.ingredients == ["3 lbs chicken", "Salt to taste"]
        assert dinner.ingredients == ["4 fillets salmon"]
        assert snack.ingredients == ["300 g yogurt"]
        assert days[1].meals[0].ingredients == ["8 eggs"]

    def test_converted_ingredients(self, sample_blueprint):
        """Test converting ingredient lines to imperial."""
        days = BlueprintRenderer(use_imperial=True).render_meals(sample_blueprint)

        breakfast, lunch, _, snack = days[0].meals
        assert breakfast.ingredients == ["2.8 oz oats", "1 cups milk"]
        assert lunch.ingredients == ["1.5 lbs chicken", "Salt to taste"]
        assert snack.ingredients == ["5.3 oz yogurt"]

    def test_unnamed_meal_and_fallback_day(self):
        """Test defaults for meals without names and days past a week."""
        blueprint = {"meals": [{}] * 7 + [{"dinner": {"ingredients": ["1 cup rice"]}}]}
        days = BlueprintRenderer().render_meals(blueprint)

        assert days[6].day == "Sunday"
        assert days[7].day == "Day 8"
        assert days[7].meals[0].name == "Meal"
        assert days[7].meals[0].ingredients == ["1 cup rice"]

    def test_missing_meals(self):
        """Test rendering a blueprint without meals."""
        assert BlueprintRenderer().render_meals({"meals": "none"}) == []


# =============================================================================
# Whole Blueprint Conversion Tests
# =============================================================================


class TestConvertBlueprint:
    """Tests for convert_blueprint_to_imperial."""

    def test_converts_shopping_list(self, sample_blueprint):
        """Test that shopping list quantities and names are converted."""
        converted = convert_blueprint_to_imperial(sample_blueprint)

        produce = converted["shoppingList"]["Produce"]
        protein = converted["shoppingList"]["Protein"]
        assert produce[0]["quantity"] == "7.1 oz"
        assert produce[1]["item"] == "Lemons – 2 items"
        assert protein[0] == "Chicken breast – 2.0 lbs"
        assert protein[1]["item"] == "Salmon fillets 1 lbs 2 oz"

    def test_converts_meal_ingredients(self, sample_blueprint):
        """Test that meal and snack ingredients are converted."""
        converted = convert_blueprint_to_imperial(sample_blueprint)

        monday = converted["meals"][0]
        assert monday["breakfast"]["ingredients"] == ["2.8 oz oats", "1 cups milk"]
        assert monday["snacks"][0]["ingredients"] == ["5.3 oz yogurt"]

    def test_input_not_mutated(self, sample_blueprint):
        """Test that the original blueprint is left untouched."""
        snapshot = copy.deepcopy(sample_blueprint)
        convert_blueprint_to_imperial(sample_blueprint)
        assert sample_blueprint == snapshot

    def test_imperial_blueprint_returned_as_is(self, imperial_blueprint):
        """Test that imperial blueprints are not copied or changed."""
        assert convert_blueprint_to_imperial(imperial_blueprint) is imperial_blueprint

    def test_conversion_is_stable(self, sample_blueprint):
        """Test that converting a converted blueprint changes nothing."""
        once = convert_blueprint_to_imperial(sample_blueprint)
        assert convert_blueprint_to_imperial(once) == once
