"""JSON persistence for the tracked city list.

Cities are stored as a JSON array using the camelCase keys of the
web front end storage format (``countryCode``, ``workStart``,
``workEnd``), so exported lists can be moved between front ends.
"""

import json
import logging
import os
import tempfile
from collections.abc import Iterable
from dataclasses import replace
from pathlib import Path
from typing import Optional, Union

from tzoverlap.domain.directory import DEFAULT_CITIES, CityDirectory
from tzoverlap.domain.models import City

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = Path.home() / ".tzoverlap" / "cities.json"


class CityStoreError(Exception):
    """Raised when the stored city list cannot be read."""


class CityStore:
    """Loads and saves the city list from a JSON file.

    Example:
        >>> store = CityStore("cities.json")
        >>> cities = store.load()
        >>> store.save(cities)
    """

    def __init__(
        self,
        path: Union[str, Path] = DEFAULT_STORE_PATH,
        directory: Optional[CityDirectory] = None,
    ):
        self.path = Path(path)
        self.directory = directory or CityDirectory()

    def load(self) -> list[City]:
        """Load stored cities, or the default cities if nothing is stored.

        Entries saved before country codes were tracked get one from the
        timezone directory.

        Raises:
            CityStoreError: If the file is not a valid city list.
        """
        if not self.path.exists():
            logger.debug("No city store at %s, using defaults", self.path)
            return list(DEFAULT_CITIES)

        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError as e:
            raise CityStoreError(f"Invalid JSON in {self.path}: {e}") from e

        if not isinstance(data, list):
            raise CityStoreError(f"Expected a list of cities in {self.path}")

        cities = []
        for entry in data:
            try:
                city = City.from_dict(entry)
            except (KeyError, TypeError, ValueError) as e:
                raise CityStoreError(f"Invalid city entry {entry!r} in {self.path}: {e}") from e

            if not city.country_code:
                country_code = self.directory.country_for_timezone(city.timezone)
                logger.info("Migrating city %s: country code %s", city.id, country_code)
                city = replace(city, country_code=country_code)
            cities.append(city)

        logger.debug("Loaded %d cities from %s", len(cities), self.path)
        return cities

    def save(self, cities: Iterable[City]) -> None:
        """Write the city list, replacing the file atomically."""
        payload = json.dumps([city.to_dict() for city in cities], indent=2)
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug("Saved cities to %s", self.path)
