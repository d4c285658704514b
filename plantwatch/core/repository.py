"""PlantWatch Plant Repository — database operations for plant records."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from plantwatch.models.plant import Plant

logger = logging.getLogger("plantwatch.repository")

PLANT_FIELDS = ("name", "weekly_water_need", "expected_humidity")


class PlantNotFound(Exception):
    """Raised when a plant name does not match any stored plant."""

    def __init__(self, name: str):
        super().__init__(f"Plant not found: {name!r}")
        self.name = name


class PlantConflict(Exception):
    """Raised when a write would give two plants the same name."""

    def __init__(self, name: str):
        super().__init__(f"A plant named '{name}' already exists")
        self.name = name


class PlantRepository:
    """Persistence for plant records, keyed by name.

    The name checks before each write only exist to produce a friendly
    conflict; the primary key constraint is what actually keeps names
    unique, and an integrity failure on commit is reported the same way.
    """

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def _session(self) -> Session:
        return self.session_factory()

    def list(self) -> list[Plant]:
        with self._session() as session:
            plants = session.scalars(select(Plant).order_by(Plant.name)).all()
            for p in plants:
                session.expunge(p)
            return list(plants)

    def get_by_name(self, name: str) -> Plant | None:
        with self._session() as session:
            plant = session.get(Plant, name)
            if plant:
                session.expunge(plant)
            return plant

    def create(self, data: dict) -> Plant:
        name = data["name"]
        with self._session() as session:
            if session.get(Plant, name) is not None:
                raise PlantConflict(name)
            plant = Plant(**{key: data[key] for key in PLANT_FIELDS})
            session.add(plant)
            self._commit(session, name)
            session.refresh(plant)
            session.expunge(plant)
            logger.info(f"Created plant {plant.name!r}")
            return plant

    def update(self, name: str, data: dict) -> Plant | None:
        """Replace every field of the plant called ``name``.

        Returns None when no such plant exists. Renaming onto a name held by
        another plant raises PlantConflict.
        """
        new_name = data["name"]
        with self._session() as session:
            plant = session.get(Plant, name)
            if not plant:
                return None
            if new_name != name and session.get(Plant, new_name) is not None:
                raise PlantConflict(new_name)
            for key in PLANT_FIELDS:
                setattr(plant, key, data[key])
            self._commit(session, new_name)
            session.refresh(plant)
            session.expunge(plant)
            if new_name != name:
                logger.info(f"Updated plant {name!r} (renamed to {new_name!r})")
            else:
                logger.info(f"Updated plant {name!r}")
            return plant

    def delete(self, name: str) -> bool:
        with self._session() as session:
            plant = session.get(Plant, name)
            if not plant:
                return False
            session.delete(plant)
            session.commit()
            logger.info(f"Deleted plant {name!r}")
            return True

    @staticmethod
    def _commit(session: Session, name: str) -> None:
        try:
            session.commit()
        except IntegrityError as e:
            session.rollback()
            logger.warning(f"Name constraint rejected write for {name!r}: {e.orig}")
            raise PlantConflict(name) from e
