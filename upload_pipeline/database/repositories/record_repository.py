from collections.abc import Sequence
from typing import Any

from psycopg import sql
from psycopg.rows import dict_row

from upload_pipeline.database.connection import get_connection
from upload_pipeline.database.models import Record
from upload_pipeline.uploads.behavior import UploadBehavior
from upload_pipeline.uploads.exceptions import RecordNotFoundError


class RecordRepository:
    """Database operations for one record table.

    Every write calls the attached upload behaviors at fixed points:
    ``before_save`` ahead of INSERT/UPDATE, ``after_insert``/``after_update``
    once the row is committed, ``after_delete`` once the DELETE is committed.
    Only ``columns`` are written; other attributes (the raw upload) stay virtual.
    """

    def __init__(
        self,
        table: str,
        columns: Sequence[str],
        behaviors: Sequence[UploadBehavior] = (),
        id_column: str = "id",
    ) -> None:
        if not columns:
            raise ValueError("RecordRepository requires at least one column")
        self._table = sql.Identifier(*table.split("."))
        self._columns = list(columns)
        self._behaviors = list(behaviors)
        self._id_column = id_column

    def find_by_id(self, record_id: int, scenario: str = "default") -> Record:
        """Load a record by primary key.

        Raises:
            RecordNotFoundError: if no row has this ID.
        """
        query = sql.SQL("SELECT {id}, {fields} FROM {table} WHERE {id} = %s").format(
            id=sql.Identifier(self._id_column),
            fields=self._field_list(),
            table=self._table,
        )
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, (record_id,))
                row = cur.fetchone()

        if row is None:
            raise RecordNotFoundError(f"Record {record_id} not found")

        return Record(id=row[self._id_column], attributes=dict(row), scenario=scenario)

    def save(self, record: Record) -> Record:
        """Insert a new record or update an existing one."""
        if record.is_new_record:
            return self.insert(record)
        return self.update(record)

    def insert(self, record: Record) -> Record:
        for behavior in self._behaviors:
            behavior.before_save(record)

        query = sql.SQL("INSERT INTO {table} ({fields}) VALUES ({values}) RETURNING {id}").format(
            table=self._table,
            fields=self._field_list(),
            values=sql.SQL(", ").join([sql.Placeholder()] * len(self._columns)),
            id=sql.Identifier(self._id_column),
        )
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, self._values(record))
                row = cur.fetchone()
                if row is None:
                    raise RuntimeError("INSERT did not return the new record id")
            conn.commit()

        record.id = row[0]
        record.attributes[self._id_column] = row[0]

        for behavior in self._behaviors:
            behavior.after_insert(record)
        return record

    def update(self, record: Record) -> Record:
        """Update an existing row.

        Raises:
            RecordNotFoundError: if no row has the record's ID.
        """
        for behavior in self._behaviors:
            behavior.before_save(record)

        assignments = sql.SQL(", ").join(
            sql.SQL("{} = %s").format(sql.Identifier(column)) for column in self._columns
        )
        query = sql.SQL("UPDATE {table} SET {assignments} WHERE {id} = %s").format(
            table=self._table,
            assignments=assignments,
            id=sql.Identifier(self._id_column),
        )
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, (*self._values(record), record.id))
                if cur.rowcount == 0:
                    raise RecordNotFoundError(f"Record {record.id} not found")
            conn.commit()

        for behavior in self._behaviors:
            behavior.after_update(record)
        return record

    def delete(self, record: Record) -> None:
        """Delete the row, then let behaviors clean up its files.

        Raises:
            RecordNotFoundError: if no row has the record's ID.
        """
        query = sql.SQL("DELETE FROM {table} WHERE {id} = %s").format(
            table=self._table,
            id=sql.Identifier(self._id_column),
        )
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, (record.id,))
                if cur.rowcount == 0:
                    raise RecordNotFoundError(f"Record {record.id} not found")
            conn.commit()

        for behavior in self._behaviors:
            behavior.after_delete(record)

    def _field_list(self) -> sql.Composed:
        return sql.SQL(", ").join(sql.Identifier(column) for column in self._columns)

    def _values(self, record: Record) -> tuple[Any, ...]:
        return tuple(record.attributes.get(column) for column in self._columns)
