"""Level core: data model, text codec, tree addressing, cell edits, history.

Callers normally only need the names re-exported here.
"""

from paralevel.level.cells import (
    Hit,
    add_block,
    add_ref,
    hit_test,
    is_within,
    remove_at,
    toggle_wall,
    upsert_floor,
)
from paralevel.level.errors import LevelFileError, ParseError
from paralevel.level.files import load_level, save_level
from paralevel.level.history import HistoryState, push_edit, redo, undo
from paralevel.level.parser import parse_level
from paralevel.level.serializer import serialize_level
from paralevel.level.tree import (
    find_path_by_id,
    format_path,
    list_all_blocks,
    next_block_id,
    parse_path,
    replace_at,
    resolve,
    walk_blocks,
)
from paralevel.level.types import (
    Block,
    Floor,
    Header,
    Level,
    Ref,
    Wall,
    create_empty_level,
)
