"""Editor session: tools, selection and undo/redo through actions."""

import pytest

from conftest import NESTED_LEVEL
from paralevel.editor.script import ScriptError, load_script, parse_script
from paralevel.editor.state import (
    BlockTool,
    EditorState,
    Erase,
    FloorTool,
    GoUp,
    Import,
    PickBlock,
    PickBlockById,
    Redo,
    RefTool,
    SelectTool,
    SetTool,
    Undo,
    UseTool,
    WallTool,
    export_text,
)
from paralevel.level import parse_level
from paralevel.level.history import HistoryState
from paralevel.level.types import Block, Button, Floor, PlayerButton, Ref, Wall, create_empty_level


def nested_state() -> EditorState:
    return EditorState(history=HistoryState(level=parse_level(NESTED_LEVEL)))


class TestDefaults:
    def test_initial_state(self):
        state = EditorState()

        assert state.level == create_empty_level()
        assert state.selected_path == [0]
        assert state.tool == SelectTool()
        assert state.selected_block.id == 0
        assert not state.can_go_up


class TestTools:
    def test_wall_tool_toggles(self):
        state = EditorState()
        state.dispatch(SetTool(WallTool()))
        state.dispatch(UseTool(2, 3))

        assert state.selected_block.children == (Wall(x=2, y=3),)
        assert state.history.can_undo

        state.dispatch(UseTool(2, 3))
        assert state.selected_block.children == ()
        assert len(state.history.past) == 2

    def test_floor_tool(self):
        state = EditorState()
        state.dispatch(SetTool(FloorTool("PlayerButton")))
        state.dispatch(UseTool(1, 1))
        state.dispatch(SetTool(FloorTool()))
        state.dispatch(UseTool(1, 1))

        assert state.selected_block.children == (Floor(x=1, y=1, type=Button()),)

    def test_block_tool_uses_next_id_and_size(self):
        state = EditorState(block_size=2)
        state.dispatch(SetTool(BlockTool()))
        state.dispatch(UseTool(4, 4))
        state.dispatch(UseTool(0, 0))

        first, second = state.selected_block.children
        assert (first.id, first.width, first.height) == (1, 2, 2)
        assert second.id == 2

    def test_ref_tool_needs_target(self):
        state = EditorState()
        state.dispatch(SetTool(RefTool()))
        state.dispatch(UseTool(1, 1))

        assert state.last_error == "Pick a target block id for Ref first."
        assert not state.history.can_undo

        state.dispatch(SetTool(RefTool(target_id=0)))
        assert state.last_error is None
        state.dispatch(UseTool(1, 1))
        assert state.selected_block.children == (Ref(x=1, y=1, id=0),)

    def test_clicks_outside_block_ignored(self):
        state = EditorState()
        state.dispatch(SetTool(WallTool()))
        state.dispatch(UseTool(9, 0))
        state.dispatch(UseTool(-1, 2))
        state.dispatch(Erase(9, 9))

        assert not state.history.can_undo

    def test_erase(self):
        state = EditorState()
        state.dispatch(SetTool(WallTool()))
        state.dispatch(UseTool(1, 1))
        state.dispatch(Erase(1, 1))

        assert state.selected_block.children == ()
        assert len(state.history.past) == 2


class TestSelection:
    def test_select_tool_descends_into_block(self):
        state = nested_state()
        state.dispatch(UseTool(1, 1))

        assert state.selected_path == [0, 1]
        assert state.selected_block.id == 1
        assert state.can_go_up

        state.dispatch(GoUp())
        assert state.selected_path == [0]
        state.dispatch(GoUp())
        assert state.selected_path == [0]

    def test_select_tool_selects_leaf(self):
        state = nested_state()
        state.dispatch(UseTool(5, 5))
        assert state.selected_child == 2

        state.dispatch(UseTool(6, 0))
        assert state.selected_child is None

    def test_edits_apply_to_open_block(self):
        state = nested_state()
        state.dispatch(PickBlock((0, 1)))
        state.dispatch(SetTool(WallTool()))
        state.dispatch(UseTool(0, 0))

        inner = state.level.roots[0].children[1]
        assert inner.children[-1] == Wall(x=0, y=0)
        assert state.level.roots[1] == parse_level(NESTED_LEVEL).roots[1]

    def test_pick_by_id(self):
        state = nested_state()
        state.dispatch(PickBlockById(2))
        assert state.selected_path == [1]

        state.dispatch(PickBlockById(99))
        assert state.selected_path == [1]
        assert state.last_error == "No block with id 99"

    def test_stale_path_makes_tools_noop(self):
        state = nested_state()
        state.dispatch(PickBlock((0, 0)))
        assert state.selected_block is None

        state.dispatch(SetTool(WallTool()))
        state.dispatch(UseTool(0, 0))
        assert not state.history.can_undo


class TestHistory:
    def test_undo_redo(self):
        state = EditorState()
        state.dispatch(SetTool(WallTool()))
        state.dispatch(UseTool(1, 1))
        state.dispatch(UseTool(2, 2))

        state.dispatch(Undo())
        assert state.selected_block.children == (Wall(x=1, y=1),)
        state.dispatch(Undo())
        assert state.level == create_empty_level()
        state.dispatch(Undo())
        assert state.level == create_empty_level()

        state.dispatch(Redo())
        assert state.selected_block.children == (Wall(x=1, y=1),)

        state.dispatch(UseTool(3, 3))
        assert not state.history.can_redo


class TestImportExport:
    def test_import_resets_session(self):
        state = EditorState()
        state.dispatch(SetTool(WallTool()))
        state.dispatch(UseTool(1, 1))
        state.dispatch(Import(NESTED_LEVEL))

        assert state.level == parse_level(NESTED_LEVEL)
        assert not state.history.can_undo
        assert state.tool == SelectTool()
        assert export_text(state) == NESTED_LEVEL

    def test_failed_import_keeps_level(self):
        state = EditorState()
        state.dispatch(Import("version 4\n#\nWall 1 1\n"))

        assert state.level == create_empty_level()
        assert state.last_error == "Line 3: Wall must be inside a Block"


class TestScript:
    def test_parse_steps(self):
        actions = parse_script(
            """
steps:
  - tool: wall
  - use: [1, 2]
  - tool: {floor: PlayerButton}
  - tool: {ref: 3}
  - tool: select
  - tool: block
  - erase: [0, 0]
  - pick: "0.1"
  - pick_id: 4
  - up
  - undo
  - redo: true
"""
        )
        assert actions == [
            SetTool(WallTool()),
            UseTool(1, 2),
            SetTool(FloorTool("PlayerButton")),
            SetTool(RefTool(3)),
            SetTool(SelectTool()),
            SetTool(BlockTool()),
            Erase(0, 0),
            PickBlock((0, 1)),
            PickBlockById(4),
            GoUp(),
            Undo(),
            Redo(),
        ]

    @pytest.mark.parametrize(
        "step",
        [
            "jump",
            "{use: [1]}",
            "{use: [a, 2]}",
            "{tool: hammer}",
            "{tool: {floor: Lava}}",
            "{pick: 0.x}",
            "{pick: 0.10}",
            "{pick: true}",
            "{pick_id: abc}",
            "{use: [1, 2], erase: [1, 2]}",
        ],
    )
    def test_bad_step_names_its_number(self, step):
        with pytest.raises(ScriptError) as exc:
            parse_script(f"steps:\n  - undo\n  - {step}\n")
        assert exc.value.step == 2

    @pytest.mark.parametrize("text", ["", "- undo\n", "steps: undo\n", "steps: [\n"])
    def test_bad_document(self, text):
        with pytest.raises(ScriptError):
            parse_script(text)

    def test_script_drives_editor(self):
        state = EditorState()
        for action in parse_script(
            "steps:\n"
            "  - tool: {floor: PlayerButton}\n"
            "  - use: [4, 4]\n"
            "  - tool: wall\n"
            "  - use: [0, 0]\n"
            "  - undo\n"
        ):
            state.dispatch(action)

        assert state.selected_block.children == (Floor(x=4, y=4, type=PlayerButton()),)
        assert state.history.can_redo

    def test_pick_accepts_text_or_root_index(self):
        assert parse_script('steps:\n  - pick: "0.10"\n  - pick: 1\n') == [
            PickBlock((0, 10)),
            PickBlock((1,)),
        ]

    def test_unquoted_dotted_pick_is_rejected(self):
        with pytest.raises(ScriptError) as exc:
            parse_script("steps:\n  - pick: 0.10\n")
        assert exc.value.step == 1
        assert "quoted block path" in str(exc.value)

    def test_load_script_rejects_non_utf8(self, tmp_path):
        path = tmp_path / "edits.yml"
        path.write_bytes(b"steps:\n  - pick: \"\xff\xfe\"\n")

        with pytest.raises(ScriptError, match="Failed to read script"):
            load_script(path)
