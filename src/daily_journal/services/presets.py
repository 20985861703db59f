"""Quick-add presets."""

from dataclasses import dataclass, field

from daily_journal.domain.errors import NotFound, ValidationError
from daily_journal.domain.goals import Preset
from daily_journal.services.records import preset_from_record, preset_to_record
from daily_journal.services.storage import PRESETS_KEY, JournalStorage
from daily_journal.services.validation import parse_number


@dataclass
class PresetService:
    """Service for the user's named quick-add entries."""

    storage: JournalStorage
    _presets: list[Preset] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        rows = self.storage.load(PRESETS_KEY, [])
        self._presets = [
            preset_from_record(row)
            for row in (rows if isinstance(rows, list) else [])
            if isinstance(row, dict)
        ]

    def list_presets(self) -> list[Preset]:
        """Return presets in creation order."""
        return list(self._presets)

    def get(self, index: int) -> Preset:
        """Return a preset by position."""
        if index < 0 or index >= len(self._presets):
            raise NotFound(f"No preset at index {index}.")
        return self._presets[index]

    def add(self, name: str, calories: object, protein: object) -> Preset:
        """Create a preset with non-negative values."""
        cleaned = name.strip()
        if not cleaned:
            raise ValidationError("Please enter a preset name.")
        message = "Please enter valid positive numbers."
        calories_value = parse_number(calories, message)
        protein_value = parse_number(protein, message)
        if calories_value < 0 or protein_value < 0:
            raise ValidationError(message)
        preset = Preset(name=cleaned, calories=calories_value, protein=protein_value)
        self._presets.append(preset)
        self._persist()
        return preset

    def delete(self, index: int) -> Preset:
        """Remove a preset by position."""
        preset = self.get(index)
        del self._presets[index]
        self._persist()
        return preset

    def _persist(self) -> None:
        self.storage.save(
            PRESETS_KEY, [preset_to_record(preset) for preset in self._presets]
        )
