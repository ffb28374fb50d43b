import json
import os

from shared.helper.HelperConfig import HelperConfig
from shared.models.export import ExportSettings


class ResultWriter:
    """Persists the accumulated batch results as one JSON file per export."""

    def __init__(self, helper_config: HelperConfig, settings: ExportSettings) -> None:
        self.logging = helper_config.get_logger()
        self._settings = settings

    def get_file_path(self) -> str:
        """Return the output path: ``{output_dir}/{resource}{suffix}.json``.

        The resource name is used as typed, without sanitizing.
        """
        file_name = f"{self._settings.resource}{self._settings.file_suffix}.json"
        return os.path.join(self._settings.output_dir, file_name)

    def do_write(self, results: list[dict]) -> str:
        """Write ``results`` as a compact JSON array, replacing any existing file.

        Args:
            results (list[dict]): One completed batch response per block.

        Returns:
            str: The path of the written file.

        Raises:
            OSError: If the file cannot be written.
        """
        file_path = self.get_file_path()
        try:
            with open(file_path, "w", encoding="utf-8") as f:
                json.dump(results, f, ensure_ascii=False, separators=(",", ":"))
        except OSError as e:
            self.logging.error("Could not write %s: %s", file_path, e)
            raise
        self.logging.info("The %s saved to the '%s' file!", self._settings.resource, file_path, color="green")
        return file_path
