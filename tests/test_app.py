from streamlit.testing.v1 import AppTest

APP_PATH = "../app.py"


def test_login_page_is_shown_first():
    at = AppTest.from_file(APP_PATH, default_timeout=30).run()
    assert not at.exception
    assert at.title[0].value == "🖐️ GestureCraft"
    assert not at.session_state["session"].is_logged_in


def test_login_requires_both_fields():
    at = AppTest.from_file(APP_PATH, default_timeout=30).run()
    at.text_input(key="login_username").input("ana")
    at.button[0].click().run()
    assert not at.exception
    assert at.error[0].value == "Please fill in all fields"
    assert not at.session_state["session"].is_logged_in


def test_login_opens_main_page():
    at = AppTest.from_file(APP_PATH, default_timeout=30).run()
    at.text_input(key="login_username").input("ana")
    at.text_input(key="login_password").input("secret")
    at.button[0].click().run()
    assert not at.exception
    assert at.session_state["session"].username == "ana"
    assert at.success[0].value == "Welcome to GestureCraft!"


def test_finger_checkboxes_drive_gesture_id():
    at = AppTest.from_file(APP_PATH, default_timeout=30).run()
    at.session_state["session"].login("ana", "secret")
    at.run()
    at.checkbox(key="finger_Index").check()
    at.checkbox(key="finger_Middle").check().run()
    assert not at.exception
    assert at.session_state["session"].gesture_id == "G_01100"


def logged_in_app():
    at = AppTest.from_file(APP_PATH, default_timeout=30).run()
    at.session_state["session"].login("ana", "secret")
    return at.run()


def button_labeled(at, label):
    return next(b for b in at.button if b.label == label)


def test_save_clears_phrase_and_keeps_selection():
    at = logged_in_app()
    at.checkbox(key="finger_Index").check()
    at.checkbox(key="finger_Middle").check().run()
    at.text_input(key="phrase").input("Help me")
    button_labeled(at, "💾 Save Gesture").click().run()

    assert not at.exception
    session = at.session_state["session"]
    assert [(g.gesture_id, g.phrase) for g in session.store.list_gestures()] == [("G_01100", "Help me")]
    assert at.text_input(key="phrase").value == ""
    assert session.selection == {"Index", "Middle"}
    assert at.checkbox(key="finger_Index").value is True
    assert at.success[0].value == "Gesture G_01100 saved successfully!"


def test_switching_preset_resets_fingers_and_phrase():
    at = AppTest.from_file(APP_PATH, default_timeout=30).run()
    session = at.session_state["session"]
    session.login("ana", "secret")
    default = session.store.active_preset
    session.create_preset("Work")
    at.run()

    at.checkbox(key="finger_Thumb").check()
    at.text_input(key="phrase").input("Unsaved")
    # Presets are listed oldest first, so Default is the first option
    at.selectbox(key="active_preset_id").select_index(0).run()

    assert not at.exception
    assert session.store.active_preset.id == default.id
    assert session.selection == set()
    assert session.phrase == ""
    assert at.checkbox(key="finger_Thumb").value is False
    assert at.text_input(key="phrase").value == ""


def test_create_preset_from_sidebar():
    at = logged_in_app()
    at.text_input(key="new_preset_name").input("Home")
    at.text_input(key="new_preset_description").input("Family phrases")
    button_labeled(at, "Create Preset").click().run()

    assert not at.exception
    store = at.session_state["session"].store
    assert [p.name for p in store.presets] == ["Default", "Home"]
    assert store.active_preset.name == "Home"
    assert store.active_preset.description == "Family phrases"
    assert at.text_input(key="new_preset_name").value == ""
    assert at.success[0].value == 'Preset "Home" created successfully!'


def test_create_duplicate_preset_shows_error():
    at = logged_in_app()
    at.text_input(key="new_preset_name").input("default")
    button_labeled(at, "Create Preset").click().run()

    assert not at.exception
    assert len(at.session_state["session"].store.presets) == 1
    assert at.error[0].value == "A preset with this name already exists"


def test_delete_active_preset_from_sidebar():
    at = AppTest.from_file(APP_PATH, default_timeout=30).run()
    session = at.session_state["session"]
    session.login("ana", "secret")
    default = session.store.active_preset
    work = session.create_preset("Work")
    session.store.save_gesture(work.id, "G_01000", "Next slide")
    at.run()

    at.button(key=f"delete_preset_{work.id}").click().run()

    assert not at.exception
    assert session.store.active_preset.id == default.id
    assert at.selectbox(key="active_preset_id").value == default.id
    assert session.store.list_gestures() == []
    assert at.success[0].value == 'Preset "Work" deleted'


def test_gesture_filter_falls_back_to_all_when_preset_deleted():
    at = AppTest.from_file(APP_PATH, default_timeout=30).run()
    session = at.session_state["session"]
    session.login("ana", "secret")
    work = session.create_preset("Work")
    at.run()

    # Options are "all", Default, Work
    at.selectbox(key="gesture_filter").select_index(2).run()
    assert at.selectbox(key="gesture_filter").value == work.id

    at.button(key=f"delete_preset_{work.id}").click().run()

    assert not at.exception
    assert at.selectbox(key="gesture_filter").value == "all"
