import asyncio

import streamlit as st

from scanfix.client.http_client import HttpScanBackend
from scanfix.core.errors import SubmissionError
from scanfix.core.logging import setup_logging
from scanfix.domain.models import ScanRequest
from scanfix.services.export_service import export_to_file
from scanfix.services.scan_controller import ScanController
from scanfix.ui.view_models import can_scan, dependency_rows, file_card, summary_rows

setup_logging()

st.title("Code Security Scanner")

source = st.radio("Source", ["GitHub Repository", "Code Input"], horizontal=True)
use_repo = source == "GitHub Repository"

repo_url = ""
code = ""
if use_repo:
    repo_url = st.text_input("GitHub Repository URL", placeholder="https://github.com/username/repository")
else:
    code = st.text_area("Code", height=250, placeholder="Paste your code here...")

language = st.selectbox("Language", ["python", "javascript"], format_func=str.capitalize)
check_dependencies = st.checkbox("Check Dependencies", value=True)


async def _run_scan(request: ScanRequest, progress_bar, status_line) -> ScanController:
    def on_update(snapshot):
        if snapshot.job is not None:
            progress_bar.progress(snapshot.job.progress_percent / 100)
            status_line.caption(snapshot.job.status_message or snapshot.state.title())

    async with HttpScanBackend() as backend:
        controller = ScanController(backend)
        controller.subscribe(on_update)
        await controller.run(request)
    return controller


if st.button("Scan", disabled=not can_scan(use_repo, repo_url, code, busy=False)):
    previous = st.session_state.get("controller")
    if previous is not None:
        previous.teardown()

    request = ScanRequest(
        repository_reference=repo_url if use_repo else None,
        inline_source=None if use_repo else code,
        language_hint=language,
        check_dependencies=check_dependencies,
    )
    status_line = st.empty()
    status_line.caption("Initializing scan...")
    progress_bar = st.progress(0)
    try:
        st.session_state["controller"] = asyncio.run(_run_scan(request, progress_bar, status_line))
    except SubmissionError as e:
        st.error(e.message)

controller = st.session_state.get("controller")
if controller is not None:
    snapshot = controller.snapshot

    if snapshot.state == "FAILED":
        st.error(snapshot.error_message or "An error occurred while scanning")

    if snapshot.state == "COMPLETED" and snapshot.results is not None:
        st.subheader("Results")

        pairs = controller.corrections()
        if not pairs:
            st.info("No code analysis results available.")

        for index, (file, correction) in enumerate(pairs):
            card = file_card(file, correction)
            with st.container(border=True):
                st.markdown(f"**File:** {card.file_name}")
                if card.findings:
                    st.markdown(":red[Vulnerabilities found:]")
                    for label in card.findings:
                        st.markdown(f"- {label}")
                else:
                    st.success("No vulnerabilities detected in this file.")

                if card.narrative:
                    st.caption("AI Analysis:")
                    st.text(card.narrative)

                if card.fixed_code is not None:
                    st.markdown(":green[**Suggested Fixed Code:**]")
                    st.code(card.fixed_code, language=snapshot.request.language_hint)
                    cols = st.columns(2)
                    if cols[0].button("Export", key=f"export-{index}"):
                        notice = export_to_file(correction)
                        (st.toast if notice.ok else st.error)(notice.message)
                    cols[1].download_button(
                        "Download",
                        data=card.fixed_code,
                        file_name=card.file_name,
                        key=f"download-{index}",
                    )

        deps = dependency_rows(snapshot.results, snapshot.request)
        if deps:
            st.subheader("Dependency Vulnerabilities")
            st.text("\n".join(deps))

        rows = summary_rows(snapshot.results.summary)
        if rows:
            st.subheader("Summary")
            for label, value in rows:
                st.write(f"{label}: {value if value is not None else '-'}")
