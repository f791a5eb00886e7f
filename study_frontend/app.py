import logging

import streamlit as st

from study_frontend import config
from study_frontend.render.output import blocks_to_html
from study_frontend.services.api import StudyBotAPI
from study_frontend.services.errors import StudyAPIError

# to run this page use the command: streamlit run study_frontend/app.py

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)
logger.debug(f"AI Study frontend loaded, API_BASE_URL={config.API_BASE_URL}")

# --- Page Config ---
st.set_page_config(page_title="AI Study", page_icon="📚", layout="wide")

# --- Session & API Setup ---
if "token" not in st.session_state:
    st.session_state.token = None
    st.session_state.user_name = ""

api = StudyBotAPI(config.API_BASE_URL)
token = st.session_state.token


def show_blocks(blocks):
    if blocks:
        st.markdown(blocks_to_html(blocks), unsafe_allow_html=True)
    else:
        st.info("Nothing to show.")


def run(action, *args, spinner="Working..."):
    """
    Calls one API method and turns a StudyAPIError into an on-page error.
    """
    with st.spinner(spinner):
        try:
            return action(*args)
        except StudyAPIError as e:
            st.error(str(e))
            return None


# --- Sidebar ---
with st.sidebar:
    st.title("📚 AI Study")

    if token:
        st.caption(f"Signed in as {st.session_state.user_name}")
        if st.button("Logout"):
            st.session_state.token = None
            st.session_state.user_name = ""
            st.rerun()
    else:
        login_tab, register_tab = st.tabs(["Login", "Register"])

        with login_tab:
            email = st.text_input("Email", key="login-email")
            password = st.text_input("Password", type="password", key="login-password")
            if st.button("Login", type="primary"):
                if not email or not password:
                    st.warning("Email + password required")
                else:
                    result = run(api.login, email.strip(), password, spinner="Logging in...")
                    if result:
                        st.session_state.token = result.token
                        st.session_state.user_name = result.user_name
                        st.rerun()

        with register_tab:
            name = st.text_input("Name", key="reg-name")
            reg_email = st.text_input("Email", key="reg-email")
            reg_password = st.text_input("Password", type="password", key="reg-password")
            mobile = st.text_input("Mobile (optional)", key="reg-mobile")
            if st.button("Create Account"):
                if not name or not reg_email or not reg_password:
                    st.warning("All fields required")
                else:
                    message = run(
                        api.register, name.strip(), reg_email.strip(), reg_password, mobile.strip() or None,
                        spinner="Creating...",
                    )
                    if message:
                        st.success(message)

# --- Main Area ---
summary_tab, explain_tab, notes_tab, mcq_tab, qna_tab, history_tab, profile_tab = st.tabs(
    ["Summarize", "Explain", "Notes", "Quiz", "Q&A", "History", "Profile"]
)

with summary_tab:
    uploaded = st.file_uploader("Upload a PDF", type=["pdf"])
    if st.button("Summarize", type="primary") and uploaded:
        blocks = run(api.summarize, token, uploaded.name, uploaded.getvalue(), uploaded.type or "application/pdf")
        if blocks is not None:
            show_blocks(blocks)

with explain_tab:
    topic = st.text_input("Topic")
    if st.button("Explain") and topic.strip():
        sections = run(api.explain, token, topic.strip())
        for section in sections or []:
            st.subheader(section.title)
            if section.paragraph:
                st.write(section.paragraph)
            for bullet in section.bullets:
                st.markdown(f"- {bullet}")
            if section.examples:
                st.markdown("**Examples**")
                for example in section.examples:
                    st.markdown(f"- {example}")
            if section.terms:
                st.markdown("**Key terms**")
                for term in section.terms:
                    st.markdown(f"- {term}")
            for faq in section.faqs:
                with st.expander(faq.q):
                    st.write(faq.a)

with notes_tab:
    notes_text = st.text_area("Text to turn into notes", key="notes-text")
    if st.button("Make Notes") and notes_text.strip():
        blocks = run(api.make_notes, token, notes_text)
        if blocks is not None:
            show_blocks(blocks)

with mcq_tab:
    mcq_text = st.text_area("Text to quiz on", key="mcq-text")
    count = st.number_input("Questions", min_value=1, max_value=20, value=5)
    if st.button("Make Quiz") and mcq_text.strip():
        records = run(api.make_mcq, token, mcq_text, int(count))
        if records is not None and not records:
            st.info("No questions could be read from the response.")
        for record in records or []:
            st.markdown(f"**{record.question_text}**")
            for letter, option in zip("ABCD", record.options):
                st.markdown(f"{letter}) {option}")
            if record.correct_answer_line:
                with st.expander("Show answer"):
                    st.write(record.correct_answer_line)

with qna_tab:
    question = st.text_input("Question")
    context = st.text_area("Context (optional)", key="qna-context")
    if st.button("Ask") and question.strip():
        answer = run(api.ask, token, question.strip(), context.strip() or None, spinner="Analyzing...")
        if answer is not None:
            st.markdown(answer)

with history_tab:
    if not token:
        st.info("Login to see your saved notes.")
    elif st.button("Load Notes"):
        notes = run(api.list_notes, token)
        if notes is not None and not notes:
            st.write("No notes found")
        for note in notes or []:
            st.markdown(f"**{note.title}**")
            st.caption(f"{note.preview}...")

with profile_tab:
    if not token:
        st.info("Not logged in.")
    else:
        profile = run(api.get_profile, token)
        if profile:
            st.markdown(f"**{profile.name}** ({profile.email})")
            new_name = st.text_input("Name", value=profile.name, key="up-name")
            new_mobile = st.text_input("Mobile", value=profile.mobile, key="up-mobile")
            if st.button("Update"):
                update = run(api.update_profile, token, new_name.strip(), new_mobile.strip())
                if update is not None:
                    if update.user_name:
                        st.session_state.user_name = update.user_name
                    st.success(update.message or "Updated ✓")

            st.divider()
            confirm = st.text_input("Type DELETE to confirm", key="delete-confirm")
            if st.button("🗑️ Delete Account"):
                if confirm.strip() != "DELETE":
                    st.warning("Type DELETE to confirm")
                else:
                    message = run(api.delete_account, token, spinner="Deleting...")
                    if message is not None:
                        st.session_state.token = None
                        st.session_state.user_name = ""
                        st.rerun()
