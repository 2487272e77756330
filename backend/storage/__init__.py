"""File-based JSON storage for the companion's persistent surface.

Data layout:
  data/
    config.json       App settings (dialogue connection, active persona, cooldowns)
    wellbeing.json    Last committed wellbeing stats
    moods.json        Append-only mood journey log

Only the wellbeing stats and mood log survive a reload; cooldowns and the
response cache live and die with the in-memory session.

Config: get_config() returns defaults merged with stored values.
update_config() applies partial updates — dialogue and cooldowns_ms merged
key-by-key, active_persona overwritten.
"""

# Re-export all public symbols so `from backend import storage` keeps working.

from .core import (  # noqa: F401
    data_dir,
    init_storage,
    read_json,
    write_json,
)

from .config import (  # noqa: F401
    get_config,
    update_config,
)

from .moods import (  # noqa: F401
    append_moods,
    clear_moods,
    get_moods,
)

from .wellbeing import (  # noqa: F401
    clear_wellbeing,
    get_wellbeing,
    save_wellbeing,
)
