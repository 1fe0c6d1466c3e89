"""Shared test fixtures — sample sources for each rule family."""

from __future__ import annotations

import io
import textwrap
import zipfile
from typing import Dict

import pytest

from raceguard.sources.models import InputFile


@pytest.fixture
def java_static_cache() -> InputFile:
    """A Java class with an unguarded static map."""
    return InputFile(
        "Cache.java",
        textwrap.dedent("""\
            public class Cache {
                public static Map cache = new HashMap();

                public Object get(String key) {
                    return cache.get(key);
                }
            }
        """),
    )


@pytest.fixture
def java_clean() -> InputFile:
    """A Java class with nothing the rules care about."""
    return InputFile(
        "Greeter.java",
        textwrap.dedent("""\
            public class Greeter {
                private static final String PREFIX = "Hello, ";

                public String greet(String name) {
                    return PREFIX + name;
                }
            }
        """),
    )


@pytest.fixture
def java_everything() -> InputFile:
    """A Java file tripping all four Java rules."""
    return InputFile(
        "Service.java",
        textwrap.dedent("""\
            public class Service {
                static int counter = 0;
                static SimpleDateFormat FORMAT = new SimpleDateFormat("yyyy");
                private ExecutorService pool = Executors.newFixedThreadPool(4);

                @Async
                public void run() {
                    counter++;
                }
            }
        """),
    )


@pytest.fixture
def sql_migration() -> InputFile:
    """SQL with an unguarded insert, an unlocked select and an untransacted update."""
    return InputFile(
        "migrate.sql",
        textwrap.dedent("""\
            INSERT INTO users (id, email) VALUES (1, 'a@example.com');
            SELECT id, email FROM users WHERE id = 1;
            UPDATE users SET email = 'b@example.com' WHERE id = 1;
        """),
    )


@pytest.fixture
def sql_guarded() -> InputFile:
    """SQL where every risky construct carries its mitigation marker."""
    return InputFile(
        "safe.sql",
        textwrap.dedent("""\
            BEGIN TRANSACTION;
            CREATE UNIQUE INDEX users_email ON users (email);
            INSERT INTO users (id, email) VALUES (1, 'a@example.com');
            SELECT id FROM users WHERE id = 1 FOR UPDATE;
            UPDATE users SET email = 'b@example.com' WHERE id = 1;
            COMMIT;
        """),
    )


@pytest.fixture
def tsx_component() -> InputFile:
    """A React component with DOM access, a leaking timer and module state."""
    return InputFile(
        "Widget.tsx",
        textwrap.dedent("""\
            let cache = {};

            export function Widget() {
              useEffect(() => {
                const el = document.getElementById("root");
                setInterval(() => el.focus(), 1000);
              }, []);
              return <div />;
            }
        """),
    )


@pytest.fixture
def sample_zip_bytes() -> bytes:
    """A zip holding tracked, untracked and undecodable members."""
    members: Dict[str, bytes] = {
        "src/Cache.java": b"public static Map cache = new HashMap();",
        "db/q.sql": b"SELECT * FROM t WITH (NOLOCK)",
        "README.md": b"# not tracked",
        "web/bad.js": b"\xff\xfe\xfa not utf-8",
    }
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr("src/", b"")
        for name, data in members.items():
            zf.writestr(name, data)
    return buf.getvalue()
