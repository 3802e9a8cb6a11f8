"""
ARR command-line utility

Simple command-line interface for listing recipes and running ARR
calculations. No UI required - designed for scripting and testing use.

Usage Examples:
    # Load the bundled sample ingredients and recipes
    python -m src.utils.arr_cli load-sample

    # List recipes with their current cost
    python -m src.utils.arr_cli list-recipes

    # Show one recipe's ingredient lines
    python -m src.utils.arr_cli show-recipe 1

    # Rescale recipe 1 so that ingredient 1 becomes 750 units
    python -m src.utils.arr_cli calculate --recipe 1 --ingredient 1 --amount 750

    # Same, as a JSON document
    python -m src.utils.arr_cli calculate --recipe 1 --ingredient 1 --amount 750 --json
"""

import argparse
import json
import sys
from typing import List, Optional

from src.services import arr_calculator_service, recipe_service
from src.services.database import initialize_app_database
from src.services.dto_utils import format_amount, format_currency, format_scaling_factor
from src.services.exceptions import ServiceError
from src.utils.config import configure_logging, get_config
from src.utils.load_sample_data import SAMPLE_DATA_FILE, load_sample_data_from_json
from src.utils.validators import parse_new_amount


def list_recipes_cmd(search: Optional[str] = None) -> int:
    """List recipes, newest first, with their cost at stored amounts."""
    currency = get_config().currency
    recipes = recipe_service.get_all_recipes(query=search)
    if not recipes:
        print("No recipes found.")
        return 0

    costs = arr_calculator_service.get_all_recipe_costs()
    for recipe in recipes:
        cost = costs.get(recipe.id)
        total = format_currency(cost.original_total_cost, currency) if cost else "-"
        print(f"{recipe.id:>4}  {recipe.name:<30} {recipe.ingredient_count:>3} ingredient(s)  {total}")
    return 0


def show_recipe_cmd(recipe_id: int) -> int:
    """Print a recipe's ingredient lines with their pricing."""
    config = get_config()
    recipe = recipe_service.fetch_recipe_with_ingredients(recipe_id)

    print(f"Recipe {recipe.recipe_id}: {recipe.name}")
    if not recipe.ingredients:
        print("  (no ingredients)")
        return 0

    for entry in recipe.ingredients:
        amount = format_amount(entry.quantity, entry.measure_unit, config.amount_decimals)
        price = format_currency(entry.unit_price, config.currency)
        base = format_amount(entry.base_amount, entry.measure_unit, config.amount_decimals)
        print(f"  [{entry.ingredient_id}] {entry.name:<20} {amount:>14}   {price} per {base}")
    return 0


def calculate_cmd(
    recipe_id: int,
    ingredient_id: int,
    amount: str,
    as_json: bool = False,
    include_costs: bool = True,
    allow_unpriced: bool = False,
) -> int:
    """Run an ARR calculation and print the result."""
    config = get_config()
    new_amount = parse_new_amount(amount)
    calculation = arr_calculator_service.calculate_arr(
        recipe_id,
        ingredient_id,
        new_amount,
        include_costs=include_costs,
        allow_unpriced=allow_unpriced,
    )

    if as_json:
        print(json.dumps(calculation.to_dict(), indent=2))
        return 0

    arr_result = calculation.arr_result
    base = arr_result.base_ingredient
    decimals = config.amount_decimals

    print(f"Recipe: {arr_result.recipe_name}")
    print(f"Scaling factor: {format_scaling_factor(arr_result.scaling_factor)}")
    print(
        f"  * {base.name:<20} {format_amount(base.original_amount, base.measure_unit, decimals):>14}"
        f" -> {format_amount(base.new_amount, base.measure_unit, decimals)}"
    )
    for item in arr_result.adjusted_ingredients:
        print(
            f"    {item.name:<20} {format_amount(item.original_amount, item.measure_unit, decimals):>14}"
            f" -> {format_amount(item.adjusted_amount, item.measure_unit, decimals)}"
        )

    cost_result = calculation.cost_result
    if cost_result is not None:
        print(f"Original cost:   {format_currency(cost_result.original_total_cost, config.currency)}")
        print(f"Adjusted cost:   {format_currency(cost_result.adjusted_total_cost, config.currency)}")
        print(f"Difference:      {format_currency(cost_result.cost_difference, config.currency)}")
        if cost_result.is_partial:
            names = [c.name for c in cost_result.ingredient_costs if not c.priced]
            print(f"WARNING: No pricing for {', '.join(names)}; totals are partial")
    return 0


def load_sample_cmd(file_path: Optional[str] = None) -> int:
    """Load a JSON seed file of ingredients and recipes."""
    path = file_path or SAMPLE_DATA_FILE
    print(f"Loading sample data from {path}...")
    counts = load_sample_data_from_json(path)
    print(
        f"Created {counts['ingredients']} ingredient(s) and {counts['recipes']} recipe(s); "
        f"skipped {counts['skipped_ingredients']} ingredient(s) and "
        f"{counts['skipped_recipes']} recipe(s) that already exist."
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Recipe ARR (Automatic Ratio Result) calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Load the sample data:
    python -m src.utils.arr_cli load-sample

  Rescale recipe 1 around ingredient 1 at 750 units:
    python -m src.utils.arr_cli calculate --recipe 1 --ingredient 1 --amount 750
""",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    list_parser = subparsers.add_parser("list-recipes", help="List recipes with their cost")
    list_parser.add_argument("-s", "--search", help="Filter recipes by name")

    show_parser = subparsers.add_parser("show-recipe", help="Show a recipe's ingredients")
    show_parser.add_argument("recipe_id", type=int, help="Recipe ID")

    calc_parser = subparsers.add_parser("calculate", help="Rescale and cost a recipe")
    calc_parser.add_argument("-r", "--recipe", dest="recipe_id", type=int, required=True,
                             help="Recipe ID")
    calc_parser.add_argument("-i", "--ingredient", dest="ingredient_id", type=int, required=True,
                             help="Reference ingredient ID")
    calc_parser.add_argument("-a", "--amount", required=True,
                             help="New amount of the reference ingredient")
    calc_parser.add_argument("--json", dest="as_json", action="store_true",
                             help="Print the result as JSON")
    calc_parser.add_argument("--no-costs", dest="include_costs", action="store_false",
                             help="Skip the costing step")
    calc_parser.add_argument("--allow-unpriced", action="store_true",
                             help="Report unpriced ingredients instead of failing")

    sample_parser = subparsers.add_parser("load-sample", help="Load a JSON seed file")
    sample_parser.add_argument("file", nargs="?", help="JSON file path (default: bundled sample)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    configure_logging()
    initialize_app_database()

    try:
        if args.command == "list-recipes":
            return list_recipes_cmd(args.search)
        elif args.command == "show-recipe":
            return show_recipe_cmd(args.recipe_id)
        elif args.command == "calculate":
            return calculate_cmd(
                args.recipe_id,
                args.ingredient_id,
                args.amount,
                as_json=args.as_json,
                include_costs=args.include_costs,
                allow_unpriced=args.allow_unpriced,
            )
        elif args.command == "load-sample":
            return load_sample_cmd(args.file)
        else:
            print(f"Unknown command: {args.command}")
            return 1
    except ServiceError as e:
        print(f"ERROR: {e.message}")
        return 1
    except (OSError, json.JSONDecodeError) as e:
        print(f"ERROR: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
