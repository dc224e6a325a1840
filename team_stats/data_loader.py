"""
YAML Data Loader for character and team data.

Loads human-curated YAML files and parses them into Pydantic models.
Handles validation and provides helpful error messages for malformed data.
"""

import logging
from pathlib import Path
from typing import TypeVar

import yaml
from pydantic import ValidationError

from .models import Character, Team, TeamSlot, TeamSpec

logger = logging.getLogger(__name__)

T = TypeVar("T", Character, TeamSpec)

DATA_SUFFIXES = (".yaml", ".yml")


class DataLoader:
    """
    Loads game data from YAML files.

    Expected layout:
        data_dir/characters/<character_id>.yaml
        data_dir/teams/<team_id>.yaml
    """

    def __init__(self, data_dir: str | Path):
        """
        Initialize the data loader.

        Args:
            data_dir: Path to the data directory containing
                      characters/ and teams/ subdirectories.
        """
        self.data_dir = Path(data_dir)
        self._validate_data_dir()

    def _validate_data_dir(self) -> None:
        """Validate that the data directory structure exists."""
        if not self.data_dir.exists():
            raise FileNotFoundError(f"Data directory not found: {self.data_dir}")

        for subdir in ("characters", "teams"):
            path = self.data_dir / subdir
            if not path.exists():
                logger.warning(f"Expected subdirectory not found: {path}")

    def _load_yaml_file(self, file_path: Path) -> dict:
        """Load a single YAML file."""
        with open(file_path, encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def _is_data_file(self, file_path: Path) -> bool:
        """Check if a file is a data file (not schema/template/example)."""
        if file_path.stem.startswith("_"):
            return False
        return file_path.suffix in DATA_SUFFIXES

    def _data_files(self, subdir: str) -> list[Path]:
        directory = self.data_dir / subdir
        if not directory.exists():
            logger.warning(f"{subdir.title()} directory not found")
            return []
        return sorted(p for p in directory.iterdir() if self._is_data_file(p))

    def _load_entity(
        self,
        file_path: Path,
        model_class: type[T],
    ) -> T | None:
        """
        Load a single entity from a YAML file.

        Args:
            file_path: Path to the YAML file.
            model_class: Pydantic model class to parse into.

        Returns:
            Parsed model instance, or None if the file is empty or invalid.
        """
        try:
            data = self._load_yaml_file(file_path)
            if not data:
                logger.warning(f"Empty file: {file_path}")
                return None

            return model_class.model_validate(data)

        except ValidationError as e:
            logger.error(f"Validation error in {file_path}:\n{e}")
            return None
        except yaml.YAMLError as e:
            logger.error(f"YAML parse error in {file_path}:\n{e}")
            return None
        except OSError as e:
            logger.error(f"Error reading {file_path}: {e}")
            return None

    def load_characters(self) -> list[Character]:
        """
        Load all character files from the characters/ directory.

        Returns:
            List of parsed Character models.
        """
        characters = []
        for file_path in self._data_files("characters"):
            character = self._load_entity(file_path, Character)
            if character:
                characters.append(character)
                logger.debug(f"Loaded character: {character.id}")

        logger.info(f"Loaded {len(characters)} characters")
        return characters

    def load_team_specs(self) -> list[TeamSpec]:
        """
        Load all team files from the teams/ directory.

        Returns:
            List of parsed TeamSpec models.
        """
        teams = []
        for file_path in self._data_files("teams"):
            team = self._load_entity(file_path, TeamSpec)
            if team:
                teams.append(team)
                logger.debug(f"Loaded team: {team.id}")

        logger.info(f"Loaded {len(teams)} teams")
        return teams

    def load_character_by_id(self, character_id: str) -> Character | None:
        """
        Load a specific character by ID.

        Args:
            character_id: The character's unique ID.

        Returns:
            Character model if found, None otherwise.
        """
        characters_dir = self.data_dir / "characters"

        # Try exact filename match
        for ext in DATA_SUFFIXES:
            file_path = characters_dir / f"{character_id}{ext}"
            if file_path.exists():
                return self._load_entity(file_path, Character)

        # Fall back to searching all files
        for character in self.load_characters():
            if character.id == character_id:
                return character

        return None

    def load_team_spec_by_id(self, team_id: str) -> TeamSpec | None:
        """Load a specific team file by ID."""
        teams_dir = self.data_dir / "teams"

        for ext in DATA_SUFFIXES:
            file_path = teams_dir / f"{team_id}{ext}"
            if file_path.exists():
                return self._load_entity(file_path, TeamSpec)

        for spec in self.load_team_specs():
            if spec.id == team_id:
                return spec

        return None

    def load_team(self, team_id: str) -> Team | None:
        """
        Load a team file and resolve its character IDs.

        Returns:
            The team snapshot, or None if no such team file exists.
        """
        spec = self.load_team_spec_by_id(team_id)
        if spec is None:
            return None

        try:
            return build_team(spec, self.load_characters())
        except ValidationError as e:
            logger.error(f"Invalid team {team_id}:\n{e}")
            return None


def build_team(spec: TeamSpec, characters: list[Character]) -> Team:
    """
    Resolve a team file's character IDs into a roster snapshot.

    Unknown IDs leave their slot empty.

    Args:
        spec: The parsed team file.
        characters: Every known character.

    Returns:
        A 7-slot Team.
    """
    by_id = {character.id: character for character in characters}
    slots = []

    for entry in spec.slots:
        character = by_id.get(entry.character_id)
        if character is None:
            logger.warning(
                f"Team {spec.id}: unknown character '{entry.character_id}' "
                f"at position {entry.position}"
            )
        slots.append(
            TeamSlot(
                position=entry.position,
                character=character,
                form_index=entry.form_index,
            )
        )

    return Team(slots=slots)
