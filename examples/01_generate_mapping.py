"""
Example 01: Generating a Cursor Mapping

This example generates a mapping module for a dataclass, prints it, and uses
it to write rows into SQLite and read them back.
"""

from __future__ import annotations

import sqlite3
import types
from dataclasses import dataclass
from typing import Annotated

from row_gen import ColumnName, ContentValues, Cursor, Int64, MapperGenerator, SqliteCursor


@dataclass(frozen=True)
class Song:
    id: Int64
    title: str
    seconds: int
    favourite: bool
    artist: Annotated[str | None, ColumnName("artist_name")]

    # Hooks: declaring them opts the class into the generated routines.
    @staticmethod
    def create_from_cursor(cursor: Cursor) -> Song:
        return song_mapping.create_from_cursor(cursor)

    def to_content_values(self) -> ContentValues:
        return song_mapping.to_content_values(self)


def main():
    unit = MapperGenerator().generate(Song)

    print("=== Generated module ===\n")
    print(unit.source)

    # A build step would write unit.source next to the model; here it is
    # loaded directly.
    global song_mapping
    song_mapping = types.ModuleType("song_mapping")
    exec(unit.source, song_mapping.__dict__)

    conn = sqlite3.connect(":memory:")
    conn.execute("""
        CREATE TABLE songs (
            id INTEGER PRIMARY KEY,
            title TEXT NOT NULL,
            seconds INTEGER NOT NULL,
            favourite INTEGER NOT NULL,
            artist_name TEXT
        )
    """)

    songs = [
        Song(1, "Blue", 215, True, "Joni Mitchell"),
        Song(2, "Untitled demo", 98, False, None),
    ]
    for song in songs:
        values = song.to_content_values()
        columns = ", ".join(values)
        placeholders = ", ".join(f":{name}" for name in values)
        conn.execute(f"INSERT INTO songs ({columns}) VALUES ({placeholders})", dict(values))

    print("=== Read back ===\n")
    cursor = SqliteCursor(conn.execute("SELECT * FROM songs ORDER BY id"))
    for song in cursor.map_all(Song.create_from_cursor):
        print(song)

    conn.close()


song_mapping: types.ModuleType

if __name__ == "__main__":
    main()
