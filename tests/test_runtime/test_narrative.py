import pytest
from lyrebird.core.actions import Action
from lyrebird.core.errors import FormatError, TargetRangeError
from lyrebird.core.events import NarrativeEvent
from lyrebird.core.world import World
from lyrebird.presentation.components import TextBlock
from lyrebird.runtime.narrative import Narrative

CHOICE_SCRIPT = """## ENTRIES
t#Hi
c#Yes@2|No@3
t#You picked A
t#You picked B
"""

def step(narrative, *actions, dt=0.01):
    narrative.update(dt, actions)

def test_single_text_runs_to_conclusion(narrative, renderer):
    concluded = []
    narrative.events.subscribe(NarrativeEvent.RUN_CONCLUDED, lambda e: concluded.append(e["index"]), weak=False)
    narrative.start("## ENTRIES\nt#Hello")

    step(narrative)
    assert narrative.context.dialogue.printing
    assert renderer.count("create_text_box") == 1

    step(narrative, Action.ADVANCE)
    box = renderer.of_kind("text_box")[0]
    assert box["text"] == "Hello"
    assert not narrative.concluded

    step(narrative, Action.ADVANCE)
    assert narrative.concluded
    assert narrative.current_entry_index() == 0
    assert concluded == [0]

    calls = len(renderer.calls)
    step(narrative, Action.ADVANCE)
    step(narrative, Action.CONFIRM)
    assert len(renderer.calls) == calls
    assert concluded == [0]

def test_start_after_conclusion_restarts(narrative):
    narrative.start("## ENTRIES\nt#Hello")
    step(narrative)
    step(narrative, Action.ADVANCE)
    step(narrative, Action.ADVANCE)
    assert narrative.concluded

    narrative.start("## ENTRIES\nt#Again")
    step(narrative)

    assert not narrative.concluded
    assert narrative.current_entry_index() == 0
    assert narrative.context.dialogue.text == "Again"

def test_choice_branching(narrative, renderer):
    narrative.start(CHOICE_SCRIPT)
    step(narrative)
    step(narrative, Action.ADVANCE)
    step(narrative, Action.ADVANCE)

    choices = narrative.context.choices
    assert narrative.current_entry_index() == 1
    assert choices.enabled
    assert choices.option_count == 2
    assert choices.pending_target == 2
    assert renderer.of_kind("text_box") == []
    items = renderer.of_kind("choice")
    assert [item["label"] for item in items] == ["Yes", "No"]
    assert [item["cursor_visible"] for item in items] == [True, False]

    step(narrative, Action.NAVIGATE_DOWN)
    assert choices.selection == 1
    assert choices.pending_target == 3
    assert [item["cursor_visible"] for item in renderer.of_kind("choice")] == [False, True]

    step(narrative, Action.CONFIRM)
    assert narrative.current_entry_index() == 3
    assert renderer.of_kind("choice") == []
    assert narrative.context.dialogue.text == "You picked B"
    assert len(renderer.of_kind("text_box")) == 1

def test_choice_layout(narrative, renderer):
    narrative.start(
        "## ENTRIES\n"
        "s#box_position:100x50x2|choice_spacing:30|choice_indent:20|cursor_offset:10\n"
        "c#Yes@0|No@0"
    )
    step(narrative)
    step(narrative)

    yes, no = renderer.of_kind("choice")
    assert yes["label_position"] == (120.0, 50.0, 2.0)
    assert yes["cursor_position"] == (100.0, 40.0, 2.0)
    assert no["label_position"] == (120.0, 20.0, 2.0)
    assert no["cursor_position"] == (100.0, 10.0, 2.0)

def test_choice_opened_event(narrative):
    opened = []
    narrative.events.subscribe(NarrativeEvent.CHOICE_OPENED, lambda e: opened.append(e.data), weak=False)
    narrative.start("## ENTRIES\nc#Yes@0|No@0")

    step(narrative)

    assert opened[0]["index"] == 0
    assert [o.label for o in opened[0]["options"]] == ["Yes", "No"]

def test_navigation_clamps_at_ends(narrative):
    narrative.start("## ENTRIES\nc#Yes@0|No@0")
    step(narrative)

    step(narrative, Action.NAVIGATE_UP)
    assert narrative.context.choices.selection == 0

    step(narrative, Action.NAVIGATE_DOWN)
    step(narrative, Action.NAVIGATE_DOWN)
    assert narrative.context.choices.selection == 1

def test_confirm_out_of_range_keeps_choice_open(narrative, errors):
    narrative.start("## ENTRIES\nc#Nowhere@7|Back@0")
    step(narrative)

    step(narrative, Action.CONFIRM)

    assert isinstance(errors[-1], TargetRangeError)
    assert errors[-1].target == 7
    assert narrative.context.choices.enabled
    assert narrative.current_entry_index() == 0

def test_choice_looping_back_to_itself_rebuilds(narrative, renderer):
    narrative.start("## ENTRIES\nc#Again@0|Out@1\nt#Bye")
    step(narrative)
    assert renderer.count("create_choice_item") == 2

    step(narrative, Action.CONFIRM)

    assert narrative.context.choices.enabled
    assert renderer.count("create_choice_item") == 4
    assert len(renderer.of_kind("choice")) == 2
    assert narrative.context.choices.selection == 0

def test_rejected_parse_keeps_previous_script(narrative, errors):
    rejected = []
    narrative.events.subscribe(NarrativeEvent.SCRIPT_REJECTED, lambda e: rejected.append(e), weak=False)
    narrative.start("## ENTRIES\nt#One\nt#Two")
    step(narrative)
    step(narrative, Action.ADVANCE)
    step(narrative, Action.ADVANCE)
    script = narrative.context.script
    assert narrative.current_entry_index() == 1

    narrative.start("## ENTRIES\nt#Fine\nbroken line")
    step(narrative)

    assert narrative.context.script is script
    assert narrative.current_entry_index() == 1
    assert len(errors) == 1
    assert isinstance(errors[0], FormatError)
    assert errors[0].line_number == 3
    assert len(rejected) == 1

    step(narrative)
    assert len(errors) == 1

def test_reparse_resets_run(narrative, renderer):
    narrative.start("## BACKGROUNDS\nforest#f.png@0x0\n## ENTRIES\ni#forest\nt#One\nt#Two")
    step(narrative)
    step(narrative)
    step(narrative, Action.ADVANCE)
    step(narrative, Action.ADVANCE)
    assert narrative.current_entry_index() == 2

    narrative.start("## ENTRIES\nt#Fresh")
    step(narrative)

    assert narrative.current_entry_index() == 0
    assert renderer.of_kind("sprite") == []
    boxes = renderer.of_kind("text_box")
    assert len(boxes) == 1
    assert narrative.context.dialogue.text == "Fresh"

def test_background_created_once_then_updated(narrative, renderer):
    narrative.start(
        "## BACKGROUNDS\nforest#f.png@10x20\nnight#n.png@0x0\n"
        "## ENTRIES\ni#forest\nt#One\ni#night\nt#Two"
    )
    step(narrative)
    sprite = renderer.of_kind("sprite")[0]
    assert sprite["image"].path == "f.png"
    assert sprite["position"] == (10.0, 20.0, 0.0)

    step(narrative)
    step(narrative, Action.ADVANCE)
    step(narrative, Action.ADVANCE)
    assert narrative.context.background.name == "night"

    assert renderer.count("create_sprite") == 1
    assert renderer.count("update_sprite") == 1
    assert renderer.of_kind("sprite")[0]["image"].path == "n.png"

    step(narrative)
    assert narrative.context.dialogue.text == "Two"

def test_actor_portrait(narrative, renderer):
    narrative.start(
        "## ACTORS\nwren#w.png|w.wav\n"
        "## ENTRIES\ns#portrait_position:5x6\nt#wren@Hello"
    )
    step(narrative)
    step(narrative)

    portrait = renderer.of_kind("sprite")[0]
    assert portrait["image"].path == "w.png"
    assert portrait["position"] == (5.0, 6.0, 1.0)

def test_voice_cues_only_while_printing(narrative, audio):
    cues = []
    narrative.events.subscribe(NarrativeEvent.VOICE_CUE, lambda e: cues.append(e["actor"]), weak=False)
    narrative.start(
        "## ACTORS\nwren#w.png|w.wav\n"
        "## ENTRIES\ns#box_text_speed:10|voice_frequency:0.1\nt#wren@Hello\nt#Quiet"
    )
    step(narrative)
    for _ in range(4):
        step(narrative, dt=0.1)

    assert narrative.context.dialogue.printing
    assert len(audio.played) > 0
    assert all(handle.path == "w.wav" for handle in audio.played)
    assert set(cues) == {"wren"}

    for _ in range(5):
        step(narrative, dt=0.1)
    assert not narrative.context.dialogue.printing
    played = len(audio.played)

    for _ in range(5):
        step(narrative, dt=0.1)
    assert len(audio.played) == played

def test_free_entries_after_text_leave_the_box_alone(narrative, renderer, audio):
    narrative.start(
        "## ACTORS\nwren#w.png|w.wav\n"
        "## ENTRIES\ns#voice_frequency:0.01\nt#wren@Hello world\ns#\ns#\nt#wren@Next"
    )
    step(narrative)
    step(narrative)
    step(narrative, Action.ADVANCE)
    renderer.calls.clear()
    audio.played.clear()

    step(narrative, Action.ADVANCE)
    step(narrative)

    assert renderer.count("update_text_box") == 0
    assert audio.played == []
    assert not narrative.context.dialogue.printing

    step(narrative)
    shown = [call[2] for call in renderer.calls if call[0] == "update_text_box"]
    assert shown
    assert all("Next".startswith(text) for text in shown)

def test_no_voice_cues_when_frequency_disabled(narrative, audio):
    narrative.start(
        "## ACTORS\nwren#w.png|w.wav\n"
        "## ENTRIES\ns#box_text_speed:10|voice_frequency:0\nt#wren@Hello"
    )
    for _ in range(6):
        step(narrative, dt=0.1)

    assert audio.played == []

def test_unknown_entry_reported_once_and_stalls(narrative, errors):
    narrative.start("## ENTRIES\nq#mystery\nt#After")

    step(narrative)
    step(narrative, Action.ADVANCE)
    step(narrative, Action.ADVANCE)

    assert len(errors) == 1
    assert narrative.current_entry_index() == 0
    assert not narrative.context.dialogue.enabled
    assert not narrative.concluded

def test_unknown_entry_skipped_when_asked(loader, renderer, audio):
    narrative = Narrative(loader, renderer=renderer, audio=audio, skip_unknown_entries=True)
    reported = []
    narrative.events.subscribe(NarrativeEvent.ERROR, lambda e: reported.append(e["error"]), weak=False)
    narrative.start("## ENTRIES\nq#mystery\nt#After")

    step(narrative)
    step(narrative)
    step(narrative)

    assert len(reported) == 1
    assert narrative.context.dialogue.text == "After"
    assert narrative.current_entry_index() == 1

def test_progress_follows_free_entries(narrative):
    changed = []
    narrative.events.subscribe(NarrativeEvent.ENTRY_CHANGED, lambda e: changed.append(e["index"]), weak=False)
    narrative.start("## ENTRIES\ns#box_text_speed:50\ni#missing\nt#Hi")

    step(narrative)
    assert narrative.current_entry_index() == 1
    step(narrative)
    assert narrative.current_entry_index() == 2
    assert changed == [1, 2]

def test_default_renderer_uses_world_entities(loader):
    world = World()
    narrative = Narrative(loader, world=world)
    narrative.start("## ENTRIES\nt#Hello")

    narrative.update(1.0)

    blocks = [e.get(TextBlock) for e in world.get_entities_with(TextBlock)]
    assert [b.text for b in blocks] == ["Hello"]

def test_empty_script_does_nothing(narrative, renderer):
    narrative.start("")

    step(narrative, Action.ADVANCE)

    assert narrative.current_entry_index() == 0
    assert renderer.calls == []
    assert not narrative.concluded
