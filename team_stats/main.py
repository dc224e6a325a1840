"""
CLI Entry Point for Team Stats.

Provides commands for:
- Exploring character and team data
- Resolving the effective stats of every unit in a team
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .characters import get_display_name, get_image_url
from .data_loader import DataLoader
from .leader import describe_team_skills
from .models import Character, SlotStats, StatLine, Team
from .resolver import StatResolver, resolve_slot

# Setup rich console
console = Console()

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    handlers=[RichHandler(console=console, rich_tracebacks=True)],
)
logger = logging.getLogger(__name__)

# Create Typer app
app = typer.Typer(
    name="team-stats",
    help="Effective stat calculator for 7-slot rosters",
    add_completion=False,
)

SLOT_LABELS = {0: "Leader", 6: "Friend"}


def get_data_dir() -> Path:
    """Get the data directory path."""
    # Check environment variable first
    if env_path := os.environ.get("TEAM_STATS_DATA_DIR"):
        return Path(env_path)

    # Default to ./data relative to project root
    return Path(__file__).parent.parent / "data"


def create_loader() -> DataLoader:
    """Create a data loader, exiting with an error if the data is missing."""
    data_dir = get_data_dir()
    try:
        return DataLoader(data_dir)
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


def format_stat_line(stats: StatLine | None) -> str:
    """Format ATK / DEF the way the roster card shows them."""
    if stats is None:
        return "-"
    return f"{stats.atk:,} / {stats.def_:,}"


def slot_label(position: int) -> str:
    return SLOT_LABELS.get(position, f"Member {position}")


def tier_label(character: Character) -> str:
    tier = character.power_tier
    return tier.name.title() if tier else ""


def form_label(character: Character) -> str:
    """Form count, marked when the unit can switch or transform."""
    if character.is_reversible:
        return f"{character.form_count} (reversible)"
    if character.has_multiple_forms:
        return f"{character.form_count} (transforms)"
    return str(character.form_count)


# =============================================================================
# COMMANDS
# =============================================================================

@app.command()
def list_characters():
    """List all characters in the data directory."""
    loader = create_loader()

    with console.status("Loading data..."):
        characters = loader.load_characters()

    if not characters:
        console.print("[yellow]No characters found.[/]")
        return

    table = Table(title="Characters")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Attribute")
    table.add_column("Tier")
    table.add_column("Rarity")
    table.add_column("Forms", justify="right")

    for character in sorted(characters, key=lambda c: c.id):
        table.add_row(
            character.id,
            get_display_name(character),
            character.attribute,
            tier_label(character),
            character.rarity or "",
            form_label(character),
        )

    console.print(table)


@app.command()
def list_teams():
    """List all team files in the data directory."""
    loader = create_loader()

    with console.status("Loading data..."):
        specs = loader.load_team_specs()

    if not specs:
        console.print("[yellow]No teams found.[/]")
        return

    table = Table(title="Teams")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Units", justify="right")

    for spec in sorted(specs, key=lambda s: s.id):
        table.add_row(spec.id, spec.name or "", str(len(spec.slots)))

    console.print(table)


@app.command()
def info(
    character_id: str = typer.Argument(..., help="Character ID"),
):
    """Show the full record of a character."""
    loader = create_loader()
    character = loader.load_character_by_id(character_id)

    if character is None:
        console.print(f"[yellow]Not found: character '{character_id}'[/]")
        return

    console.print(character.model_dump_json(indent=2, by_alias=True, exclude_none=True))


@app.command()
def stats(
    team_id: str = typer.Argument(..., help="Team ID"),
    output_json: bool = typer.Option(False, "--json", help="Output raw JSON"),
):
    """Resolve the effective stats of every unit in a team."""
    loader = create_loader()

    with console.status("Loading data..."):
        team = loader.load_team(team_id)

    if team is None:
        console.print(f"[red]Error: Team not found or invalid: {team_id}[/]")
        raise typer.Exit(1)

    results = StatResolver().resolve_team(team)

    if output_json:
        payload = [r.model_dump(by_alias=True) for r in results]
        console.print(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    print_team_skills(team)
    print_slot_table(team, results)


@app.command()
def unit(
    character_id: str = typer.Argument(..., help="Character ID"),
    team_id: Optional[str] = typer.Option(None, "--team", "-t", help="Team to resolve against"),
    position: int = typer.Option(1, "--position", "-p", min=0, max=6, help="Slot to place the unit in"),
    form: int = typer.Option(0, "--form", "-f", help="Active form index"),
):
    """Resolve one unit's stats, optionally placed into a team."""
    loader = create_loader()

    character = loader.load_character_by_id(character_id)
    if character is None:
        console.print(f"[red]Error: Character not found: {character_id}[/]")
        raise typer.Exit(1)

    team = Team.empty()
    if team_id:
        team = loader.load_team(team_id)
        if team is None:
            console.print(f"[red]Error: Team not found or invalid: {team_id}[/]")
            raise typer.Exit(1)

    team = team.with_character(position, character, form)
    result = resolve_slot(team.slot(position), team)

    print_slot_table(team, [result])

    image_url = get_image_url(character, form)
    if image_url:
        console.print(f"Image: {image_url}")


# =============================================================================
# OUTPUT
# =============================================================================

def print_team_skills(team: Team) -> None:
    """Print the leader and friend skill panels."""
    summary = describe_team_skills(team)
    console.print(Panel(summary.leader_text, title="Leader Skill"))
    console.print(Panel(summary.friend_text, title="Friend Skill"))


def print_slot_table(team: Team, results: list[SlotStats]) -> None:
    """Print resolved stats, one row per occupied slot."""
    table = Table(title="Resolved Stats (ATK / DEF)")
    table.add_column("Slot", style="cyan")
    table.add_column("Character", style="green")
    table.add_column("HP", justify="right")
    table.add_column("55%", justify="right")
    table.add_column("100%", justify="right")
    table.add_column("After Action", justify="right")
    table.add_column("LS Ki", justify="right")
    table.add_column("Passive Ki", justify="right")

    for result in results:
        character = team.slot(result.position).character
        hp = result.potential_100.hp if result.potential_100 else 0
        after_label = format_stat_line(result.after_action)
        if result.super_attack_count:
            after_label += f" (x{result.super_attack_count + 1})"

        table.add_row(
            slot_label(result.position),
            get_display_name(character, result.form_index),
            f"{hp:,}",
            format_stat_line(result.potential_55),
            format_stat_line(result.potential_100),
            after_label,
            f"+{result.leader_ki:g}",
            f"+{result.passive_ki:g}",
        )

    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
