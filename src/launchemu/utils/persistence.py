"""JSON file storage for pydantic models (the emulator config).

Writes go to a sibling ``.tmp`` file that then replaces the target, and the
previous version is kept as ``.bak``. A file that exists but does not load
is left on disk untouched for the user to repair.
"""

import logging
import shutil
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from launchemu.exceptions import ConfigFileInvalidError, ConfigurationError, wrap_pydantic_error

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class PydanticPersistence:
    """
    Load and save helpers shared by persisted models.

    Example Usage:
        ```python
        config = PydanticPersistence.load_json(path, EmulatorConfig)
        PydanticPersistence.save_json(config.model_copy(update={"strict_commands": True}), path)
        ```
    """

    @staticmethod
    def load_json(path: Path, model_type: type[T]) -> T:
        """
        Read a JSON file into a validated model.

        Raises:
            FileNotFoundError: If there is no file at path
            ConfigFileInvalidError: If the file is blank, unreadable or not JSON
            ConfigValidationError: If the JSON does not fit the model
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigFileInvalidError(str(path), f"cannot read file: {e}") from e

        if not text.strip():
            raise ConfigFileInvalidError(str(path), "File is empty")

        try:
            model = model_type.model_validate_json(text)
        except ValidationError as e:
            logger.error(f"{path} does not hold a valid {model_type.__name__}: {e}")
            raise wrap_pydantic_error(e, str(path)) from e

        logger.debug(f"Loaded {model_type.__name__} from {path}")
        return model

    @staticmethod
    def save_json(data: BaseModel, path: Path, backup: bool = True) -> None:
        """
        Write a model as indented JSON, creating parent directories.

        Args:
            data: Model to write
            path: Destination file
            backup: Copy an existing file to ``<name>.bak`` first

        Raises:
            OSError: If the file cannot be written
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        if backup and path.exists():
            backup_path = path.with_suffix(path.suffix + ".bak")
            shutil.copy2(path, backup_path)
            logger.debug(f"Backed up {path} to {backup_path}")

        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            temp_path.write_text(data.model_dump_json(indent=2), encoding="utf-8")
            temp_path.replace(path)
        finally:
            if temp_path.exists():
                temp_path.unlink()
        logger.debug(f"Saved {type(data).__name__} to {path}")

    @staticmethod
    def ensure_valid_or_create(
        path: Path,
        model_type: type[T],
        default_factory: Callable[[], T] | None = None,
        auto_save: bool = True,
    ) -> T:
        """
        Load a model, falling back to defaults.

        Only a missing file is replaced by the defaults (when auto_save is
        set). An invalid file yields defaults in memory and stays as it is.

        Args:
            path: JSON file to load
            model_type: Model class
            default_factory: Builds the default instance (model_type() if None)
            auto_save: Write the defaults when the file is missing
        """
        make_default = default_factory or model_type
        try:
            return PydanticPersistence.load_json(path, model_type)
        except FileNotFoundError:
            instance = make_default()
            if auto_save:
                PydanticPersistence.save_json(instance, path, backup=False)
                logger.info(f"Created {path} with default {model_type.__name__}")
            return instance
        except ConfigurationError as e:
            logger.warning(
                f"Ignoring invalid {path} ({e.user_message}); "
                f"using default {model_type.__name__} and leaving the file as is"
            )
            return make_default()
