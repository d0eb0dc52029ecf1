import streamlit as st

from gesture_config import FINGER_NAMES, setup_logging
from gesture_errors import GestureCraftError
from finger_utils import format_gesture_binary
from gesture_session import GestureSession

st.set_page_config(page_title="GestureCraft", page_icon="🖐️", layout="wide")

# One session (and its in-memory store) per browser session
if "session" not in st.session_state:
    setup_logging()
    st.session_state.session = GestureSession()
    st.session_state.notices = []

session = st.session_state.session


def notify(kind, message):
    st.session_state.notices.append((kind, message))


def show_notices():
    for kind, message in st.session_state.notices:
        if kind == "error":
            st.error(message)
        elif kind == "success":
            st.success(message)
        else:
            st.info(message)
    st.session_state.notices = []


def sync_widgets():
    """Push the session's selection and phrase back into the widgets."""
    for name in FINGER_NAMES:
        st.session_state[f"finger_{name}"] = name in session.selection
    st.session_state.phrase = session.phrase


# ----------------------------------------------------------------------
# Callbacks
# ----------------------------------------------------------------------

def on_login():
    try:
        session.login(st.session_state.login_username, st.session_state.login_password)
    except GestureCraftError as e:
        notify("error", str(e))
    else:
        sync_widgets()
        notify("success", "Welcome to GestureCraft!")


def on_logout():
    session.logout()
    sync_widgets()


def on_clear():
    session.clear()
    sync_widgets()
    notify("info", "Gesture cleared")


def on_use_suggestion(phrase):
    session.set_phrase(phrase)
    st.session_state.phrase = phrase


def on_select_preset():
    try:
        session.select_preset(st.session_state.active_preset_id)
    except GestureCraftError as e:
        notify("error", str(e))
    sync_widgets()


def on_create_preset():
    try:
        preset = session.create_preset(st.session_state.new_preset_name,
                                       st.session_state.new_preset_description)
    except GestureCraftError as e:
        notify("error", str(e))
    else:
        st.session_state.new_preset_name = ""
        st.session_state.new_preset_description = ""
        notify("success", f'Preset "{preset.name}" created successfully!')


def on_update_preset(preset_id):
    try:
        session.update_preset(preset_id,
                              name=st.session_state[f"edit_name_{preset_id}"],
                              description=st.session_state[f"edit_description_{preset_id}"])
    except GestureCraftError as e:
        notify("error", str(e))
    else:
        notify("success", "Preset updated successfully!")


def on_delete_preset(preset_id, name):
    try:
        session.delete_preset(preset_id)
    except GestureCraftError as e:
        notify("error", str(e))
    else:
        notify("success", f'Preset "{name}" deleted')


def on_delete_gesture(preset_id, gesture_id):
    session.delete_gesture(preset_id, gesture_id)
    notify("success", "Gesture deleted successfully")


def on_test_phrase(phrase):
    try:
        session.test_phrase(phrase)
    except GestureCraftError as e:
        notify("error", str(e))


def on_use_camera_selection(selection):
    session.set_selection(selection)
    sync_widgets()
    notify("info", f"Selection set from camera: {', '.join(f for f in FINGER_NAMES if f in selection)}")


# ----------------------------------------------------------------------
# Pages
# ----------------------------------------------------------------------

def login_page():
    st.title("🖐️ GestureCraft")
    st.markdown("Sign in to customize your smart glove gestures.")
    show_notices()

    with st.form("login"):
        st.text_input("Username", key="login_username")
        st.text_input("Password", type="password", key="login_password")
        st.form_submit_button("Sign In", on_click=on_login)


@st.cache_resource
def get_hand_reader():
    # Camera support is an optional install (opencv + mediapipe)
    from hand_reader import HandReader
    return HandReader(static_image_mode=True)


def camera_section():
    with st.expander("📷 Read fingers from camera"):
        snapshot = st.camera_input("Show your hand to the camera", key="snapshot")
        if snapshot is None:
            return
        try:
            selection = get_hand_reader().read_image_bytes(snapshot.getvalue())
        except ImportError:
            st.error("Camera support needs opencv-python and mediapipe (pip install .[camera])")
            return
        if selection is None:
            st.warning("No hand detected")
            return
        st.write("Detected: " + (", ".join(f for f in FINGER_NAMES if f in selection) or "closed fist"))
        st.button("Use this selection", on_click=on_use_camera_selection, args=(selection,))


def hand_section():
    st.subheader("✨ Interactive Hand")
    st.caption("Click on fingers to create your gesture combination")

    columns = st.columns(len(FINGER_NAMES))
    for column, name in zip(columns, FINGER_NAMES):
        with column:
            st.checkbox(name, key=f"finger_{name}")
    session.set_selection({name for name in FINGER_NAMES if st.session_state[f"finger_{name}"]})

    camera_section()


def configuration_section():
    st.subheader("🔄 Gesture Configuration")
    st.caption("Configure the voice output for your gesture")

    gesture_id = session.gesture_id
    st.markdown("**Generated Gesture ID**")
    st.code(gesture_id, language=None)
    st.caption(f"Binary: {format_gesture_binary(gesture_id)}")

    existing = session.existing_phrase
    if existing:
        st.warning(f'⚠️ This gesture already has a phrase: "{existing}"\n\n'
                   "Saving will overwrite the existing phrase.")

    if st.session_state.pop("clear_phrase", False):
        st.session_state.phrase = ""
    phrase = st.text_input("Voice Output Phrase", key="phrase",
                           placeholder="Enter the phrase to be spoken...")
    session.set_phrase(phrase)
    st.caption("This phrase will be spoken when the gesture is performed")

    suggestion = session.suggestion
    if suggestion and not phrase:
        st.button(f'💡 Use suggestion: "{suggestion}"', on_click=on_use_suggestion, args=(suggestion,))

    save_col, clear_col = st.columns([3, 1])
    with clear_col:
        st.button("Clear", on_click=on_clear)
    with save_col:
        clicked = st.button("💾 Save Gesture", type="primary",
                            disabled=session.is_loading or not session.selection)
    if clicked:
        with st.spinner("Saving..."):
            try:
                saved = session.save()
            except GestureCraftError as e:
                st.error(str(e))
            else:
                st.session_state.clear_phrase = True
                notify("success", f"Gesture {saved.gesture_id} saved successfully!")
                st.rerun()


def preset_sidebar():
    store = session.store
    with st.sidebar:
        st.header("Presets")

        presets = store.presets
        names = {preset.id: preset.name for preset in presets}
        st.session_state.active_preset_id = store.active_preset.id
        st.selectbox("Active preset", options=list(names), format_func=names.get,
                     key="active_preset_id", on_change=on_select_preset)
        if store.active_preset.description:
            st.caption(store.active_preset.description)

        with st.expander("➕ New preset"):
            with st.form("create_preset"):
                st.text_input("Name", key="new_preset_name", placeholder="e.g., Home, Work")
                st.text_input("Description", key="new_preset_description")
                st.form_submit_button("Create Preset", on_click=on_create_preset)

        for preset in presets:
            gesture_count = len(store.list_gestures(preset.id))
            label = f"{preset.name} ({gesture_count} gestures)"
            if preset.id == store.active_preset.id:
                label += " ✓"
            with st.expander(label):
                with st.form(f"edit_preset_{preset.id}"):
                    st.text_input("Name", value=preset.name, key=f"edit_name_{preset.id}")
                    st.text_input("Description", value=preset.description,
                                  key=f"edit_description_{preset.id}")
                    st.form_submit_button("Save Changes", on_click=on_update_preset, args=(preset.id,))
                st.button("🗑️ Delete preset", key=f"delete_preset_{preset.id}",
                          disabled=len(presets) <= 1,
                          help="This will also delete all gestures in this preset",
                          on_click=on_delete_preset, args=(preset.id, preset.name))


def saved_gestures_section():
    store = session.store
    st.subheader("Saved Gestures")
    st.caption("Your configured gesture-to-phrase mappings")

    stats = store.gesture_stats()
    total_col, unique_col, presets_col = st.columns(3)
    total_col.metric("Total gestures", stats["total"])
    unique_col.metric("Unique gesture ids", stats["unique_gesture_ids"])
    presets_col.metric("Presets", len(store.presets))

    names = {preset.id: preset.name for preset in store.presets}
    # Filtered preset may have been deleted since
    if st.session_state.get("gesture_filter", "all") not in ["all", *names]:
        st.session_state.gesture_filter = "all"
    filter_col, search_col = st.columns([1, 2])
    with filter_col:
        preset_filter = st.selectbox("Preset", options=["all"] + list(names),
                                     format_func=lambda value: "All presets" if value == "all" else names[value],
                                     key="gesture_filter")
    with search_col:
        search = st.text_input("Search", key="gesture_search",
                               placeholder="Search by phrase, gesture id, preset or finger...")

    gestures = store.list_gestures(None if preset_filter == "all" else preset_filter, search)
    if not gestures:
        st.info("No gestures found" if search else "No gestures saved yet")
        return

    for gesture in gestures:
        with st.container(border=True):
            info_col, test_col, delete_col = st.columns([6, 1, 1])
            with info_col:
                st.markdown(f'`{gesture.gesture_id}` ({format_gesture_binary(gesture.gesture_id)}) '
                            f'**"{gesture.phrase}"**')
                st.caption(f"{names[gesture.preset_id]} · {', '.join(gesture.fingers)} · "
                           f"updated {gesture.updated_at:%Y-%m-%d %H:%M:%S}")
            key = f"{gesture.preset_id}_{gesture.gesture_id}"
            test_col.button("🔊", key=f"test_{key}", help="Test phrase (Text-to-Speech)",
                            on_click=on_test_phrase, args=(gesture.phrase,))
            delete_col.button("🗑️", key=f"delete_{key}", help="Delete gesture",
                              on_click=on_delete_gesture, args=(gesture.preset_id, gesture.gesture_id))


def main_page():
    title_col, user_col = st.columns([4, 1])
    with title_col:
        st.title("🖐️ GestureCraft")
        st.caption("Gesture Customization Interface")
    with user_col:
        st.write(f"👤 **{session.username}**")
        st.button("Logout", on_click=on_logout)

    show_notices()
    preset_sidebar()

    hand_col, config_col = st.columns(2)
    with hand_col:
        hand_section()
    with config_col:
        configuration_section()

    st.divider()
    saved_gestures_section()


if session.is_logged_in:
    main_page()
else:
    login_page()
