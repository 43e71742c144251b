from sqlalchemy import text
from sqlalchemy.engine import Engine
from utils.logger import get_logger

logger = get_logger(__name__)

# Current schema version
CURRENT_SCHEMA_VERSION = 1

def get_db_schema_sql() -> str:
    """
    DuckDB schema.
    UPDATEs on tables referenced by a FOREIGN KEY fail easily in DuckDB, so the
    tables carry only primary keys. Ownership and links are kept
    consistent by the repositories.
    """
    return """
    CREATE SEQUENCE IF NOT EXISTS seq_songs_id START 1;
    CREATE SEQUENCE IF NOT EXISTS seq_setlists_id START 1;
    CREATE SEQUENCE IF NOT EXISTS seq_setlist_songs_id START 1;

    CREATE TABLE IF NOT EXISTS songs (
        id INTEGER PRIMARY KEY DEFAULT nextval('seq_songs_id'),
        user_id VARCHAR NOT NULL,
        title VARCHAR NOT NULL,
        artist VARCHAR NOT NULL,
        album VARCHAR,
        genre VARCHAR,
        bpm INTEGER,
        musical_key VARCHAR,
        duration_seconds INTEGER,
        difficulty_rating INTEGER,
        notes VARCHAR,
        tags VARCHAR,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP
    );

    CREATE TABLE IF NOT EXISTS setlists (
        id INTEGER PRIMARY KEY DEFAULT nextval('seq_setlists_id'),
        user_id VARCHAR NOT NULL,
        name VARCHAR NOT NULL,
        description VARCHAR,
        venue VARCHAR,
        performance_date TIMESTAMP,
        expected_duration_minutes INTEGER,
        performance_notes VARCHAR,
        is_template BOOLEAN DEFAULT FALSE,
        is_active BOOLEAN DEFAULT FALSE,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP
    );

    CREATE TABLE IF NOT EXISTS setlist_songs (
        id INTEGER PRIMARY KEY DEFAULT nextval('seq_setlist_songs_id'),
        setlist_id INTEGER NOT NULL,
        song_id INTEGER NOT NULL,
        position INTEGER NOT NULL,
        custom_bpm INTEGER,
        custom_key VARCHAR,
        performance_notes VARCHAR,
        transition_notes VARCHAR,
        is_encore BOOLEAN DEFAULT FALSE,
        is_optional BOOLEAN DEFAULT FALSE,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );

    CREATE TABLE IF NOT EXISTS schema_info (
        key VARCHAR PRIMARY KEY,
        value VARCHAR NOT NULL
    );
    """

def get_current_schema_version(conn) -> int:
    try:
        result = conn.execute(text("SELECT value FROM schema_info WHERE key = 'version'"))
        row = result.fetchone()
        return int(row[0]) if row else 0
    except Exception: return 0

def set_schema_version(conn, version: int):
    conn.execute(text("""
        INSERT INTO schema_info (key, value) VALUES ('version', :version)
        ON CONFLICT (key) DO UPDATE SET value = :version
    """), {"version": str(version)})

def init_raw_db(conn_engine: Engine):
    logger.info("Initializing DuckDB schema...")
    try:
        with conn_engine.begin() as conn:
            statements = [s.strip() for s in get_db_schema_sql().split(';') if s.strip()]
            for stmt in statements:
                conn.execute(text(stmt))

            current_version = get_current_schema_version(conn)
            if current_version < CURRENT_SCHEMA_VERSION:
                set_schema_version(conn, CURRENT_SCHEMA_VERSION)
    except Exception as e:
        logger.error(f"Failed to initialize database schema: {e}")
        raise e
