import textwrap

from .recipe import Recipe

WIDTH = 78
ERROR_IMAGE_URL = "https://placehold.co/600x400/D1D5DB/1F2937?text=Error"


def _rule(char: str = "=") -> str:
    return char * WIDTH


def render_recipe(recipe: Recipe) -> str:
    """Format a recipe as a text card for the terminal."""
    lines = [_rule(), recipe.name]
    tags = " | ".join(t for t in (recipe.category, recipe.area) if t)
    if tags:
        lines.append(tags)
    if recipe.thumbnail:
        lines.append(f"Image: {recipe.thumbnail}")
    lines.append(_rule("-"))

    lines.append("Ingredients:")
    if recipe.ingredients:
        for ing in recipe.ingredients:
            lines.append(f"  - {ing.text}")
    else:
        lines.append("  (none listed)")

    lines.append("")
    lines.append("Instructions:")
    for paragraph in recipe.instructions.splitlines():
        paragraph = paragraph.strip()
        if paragraph:
            lines.extend(textwrap.wrap(paragraph, width=WIDTH, initial_indent="  ", subsequent_indent="  "))

    if recipe.youtube:
        lines.append("")
        lines.append(f"Watch on YouTube: {recipe.youtube}")
    if recipe.ingredients:
        lines.append("(type 'copy' to print the ingredient list)")
    lines.append(_rule())
    return "\n".join(lines)


def render_error(message: str) -> str:
    return "\n".join([_rule(), "Error", f"Image: {ERROR_IMAGE_URL}", _rule("-"), f"  {message}", _rule()])
