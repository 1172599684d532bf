# Streamlit front-end for the caption relay.
#   streamlit run ui/streamlit_app.py
# Expects the API at settings.relay_url (uvicorn instacaption.main:app).
import streamlit as st

from instacaption.core.settings import settings
from instacaption.ui.client import CaptionClient
from instacaption.ui.form import CaptionForm
from instacaption.ui.prompt import Tone, hashtag_label, word_length_label
from instacaption.ui.selection import SelectedFile

st.set_page_config(layout="wide", page_title="Caption my Images")

# --- Session state ------------------------------------------------------------
if "form" not in st.session_state:
    st.session_state.form = CaptionForm(client=CaptionClient(settings.relay_url))
if "uploader_key" not in st.session_state:
    st.session_state.uploader_key = 0
if "generating" not in st.session_state:
    st.session_state.generating = False

form: CaptionForm = st.session_state.form

st.title("Caption my Images")
st.write("Don't know what to write for your Instagram post? Let us help you out!")

col1, col2 = st.columns([1, 1])

# Fixed labels and keys keep the sliders' identity stable; the value-dependent
# text is rendered underneath once the config is updated.
with col1:
    word_length = st.slider("Words", 0, 300, form.config.word_length, step=1, key="word_length")
    hashtag_count = st.slider("Hashtags", 0, 10, form.config.hashtag_count, step=1, key="hashtag_count")
with col2:
    tone_options = [None] + list(Tone)
    tone = st.selectbox(
        "Choose your tone of voice",
        tone_options,
        index=tone_options.index(form.config.tone),
        format_func=lambda t: "Tone" if t is None else t.value.capitalize(),
    )
    seed_text = st.text_input(
        "Briefly, what do you want the caption to be about? (optional)",
        value=form.config.seed_text,
    )
form.update(word_length=word_length, hashtag_count=hashtag_count, tone=tone, seed_text=seed_text)
with col1:
    st.caption(word_length_label(form.config))
    st.caption(hashtag_label(form.config))

# --- Upload widget ------------------------------------------------------------
# The uploader is only an intake: its files are moved into the store and the
# widget is reset, so removal/clear go through the store alone.
uploaded = st.file_uploader(
    "Drag and drop files here, or click to select files",
    type=[t.split("/")[-1] for t in (form.store.accepted_types or ())] or None,
    accept_multiple_files=True,
    key=f"uploader_{st.session_state.uploader_key}",
    help=form.dropzone.describe_limits(),
)
st.caption(form.dropzone.describe_limits())
if uploaded:
    form.dropzone.pick([SelectedFile.from_bytes(f.name, f.getvalue(), f.type) for f in uploaded])
    st.session_state.uploader_key += 1
    st.rerun()

rows = form.store.render()
if rows:
    cols = st.columns(5)
    for i, f, handle in rows:
        with cols[i % 5]:
            img = form.store.previews.get(handle) if handle else None
            if img is not None:
                st.image(img, caption=f.name)
            else:
                st.write(f.name)
            if st.button("Remove", key=f"remove_{i}_{id(f)}"):
                form.store.remove_file(i)
                st.rerun()
    if st.button("Clear all"):
        form.store.clear_all()
        st.rerun()

# --- Submit -------------------------------------------------------------------
# The flag is raised in the click callback, before the script reruns, so the
# button is already disabled for the whole request.
def _start_generating():
    st.session_state.generating = True

st.button(
    "Generate Caption",
    key="generate",
    disabled=st.session_state.generating,
    on_click=_start_generating,
    use_container_width=True,
)
if st.session_state.generating:
    try:
        with st.spinner("Generating caption..."):
            form.generate()
    finally:
        st.session_state.generating = False
    st.rerun()

# Releases every preview handle before starting a fresh form. Sessions that
# simply end leave the thumbnails to garbage collection with the session state.
if st.button("Start over", key="start_over", disabled=st.session_state.generating):
    form.close()
    del st.session_state["form"]
    st.session_state.uploader_key += 1
    st.rerun()

if form.analysis:
    st.subheader("Your snazzy caption")
    # st.code renders a copy-to-clipboard button
    st.code(form.analysis, language=None, wrap_lines=True)
