# ui/dashboard.py
import sys, os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
import streamlit as st
import requests
import pandas as pd
from config import Settings
from matching.views import (
    SORT_OPTIONS,
    VERDICT_FILTERS,
    filter_and_sort,
    to_dataframe,
    top_missing_skills,
    verdict_distribution,
)
from schemas import StoredAnalysis

# -------------------- CONFIG --------------------
API_URL = Settings.from_env().api_url
st.set_page_config(page_title="AI Resume Check", page_icon="🧠", layout="wide")
st.title("🤖 AI Resume Check")

st.markdown(
    "Upload a job description and a batch of resumes. Every resume is scored in a single AI call: "
    "relevance, matching and missing skills, ATS issues and learning resources."
)

# -------------------- SESSION STATE --------------------
if "api_url" not in st.session_state:
    st.session_state.api_url = API_URL

# Results of the latest batch survive tab switches / reruns
if "analyses" not in st.session_state:
    st.session_state.analyses = []
if "statuses" not in st.session_state:
    st.session_state.statuses = []
if "batch_error" not in st.session_state:
    st.session_state.batch_error = None
if "jd_text" not in st.session_state:
    st.session_state.jd_text = ""
if "rewrites" not in st.session_state:
    st.session_state.rewrites = {}

# Cache for jobs list
if "job_list_cache" not in st.session_state:
    st.session_state.job_list_cache = None


def fetch_jobs():
    if st.session_state.job_list_cache is None:
        try:
            resp = requests.get(f"{st.session_state.api_url}/jobs/list", timeout=30)
            st.session_state.job_list_cache = resp.json() if resp.status_code == 200 else []
        except requests.exceptions.RequestException:
            st.session_state.job_list_cache = []
    return st.session_state.job_list_cache


def error_detail(r) -> str:
    try:
        body = r.json()
    except ValueError:
        return r.text
    return body.get("detail") or body.get("error") or r.text


STATUS_ICONS = {"pending": "⏳", "processing": "🔄", "success": "✅", "error": "❌"}

# -------------------- TABS --------------------
tab1, tab2, tab3, tab4, tab5 = st.tabs(
    ["📤 Dashboard", "🧾 Job Descriptions", "📊 Resume Analysis", "📈 Analytics", "⚙️ Settings"]
)

# ==================== TAB 1: Upload & Analyze ====================
with tab1:
    st.subheader("Analyze Resumes")

    jobs = fetch_jobs()
    source = st.radio("Job description source", ["Saved job", "Paste text", "Upload file"], horizontal=True)

    data = {}
    jd_files = {}
    if source == "Saved job":
        if not jobs:
            st.warning("⚠️ No saved job descriptions. Add one in the Job Descriptions tab or paste the text.")
        else:
            job_options = {j["title"]: j["id"] for j in jobs}
            selected = st.selectbox("Select Job", options=list(job_options.keys()))
            data["job_id"] = job_options[selected]
    elif source == "Paste text":
        data["jd_text"] = st.text_area("Job Description", height=200)
    else:
        jd_upload = st.file_uploader("Job Description (PDF or TXT)", type=["pdf", "txt"], key="jd_upload")
        if jd_upload:
            jd_files["jd_file"] = (jd_upload.name, jd_upload.getvalue(), jd_upload.type)

    resume_files = st.file_uploader(
        "Resumes (PDF or TXT)", type=["pdf", "txt"], accept_multiple_files=True, key="resume_upload"
    )

    if st.button("🔍 Analyze Resumes", disabled=not resume_files):
        files = [("resumes", (f.name, f.getvalue(), f.type)) for f in resume_files]
        files += [(k, v) for k, v in jd_files.items()]
        with st.spinner(f"Analyzing {len(resume_files)} resume(s)..."):
            try:
                r = requests.post(f"{st.session_state.api_url}/analyze", data=data, files=files)
            except requests.exceptions.RequestException as e:
                st.error(f"❌ Connection error: {e}")
                st.stop()

        body = {}
        try:
            body = r.json()
        except ValueError:
            pass
        st.session_state.statuses = body.get("statuses", [])
        st.session_state.analyses = [StoredAnalysis.model_validate(a) for a in body.get("analyses", [])]
        st.session_state.batch_error = body.get("error") or (None if r.ok else error_detail(r))
        st.session_state.rewrites = {}
        st.session_state.jd_text = body.get("jdText", "")

        if body.get("rejected"):
            st.warning(f"⚠️ Unsupported file(s) ignored: {', '.join(body['rejected'])}")
        if st.session_state.batch_error:
            st.error(f"❌ {st.session_state.batch_error}")
        else:
            st.success(f"✅ Analyzed {len(st.session_state.analyses)} resume(s). See the Resume Analysis tab.")

    if st.session_state.statuses:
        st.markdown("### 📂 File Status")
        for s in st.session_state.statuses:
            line = f"{STATUS_ICONS.get(s['status'], '')} **{s['file']['name']}** - {s['status']}"
            if s.get("error"):
                line += f" ({s['error']})"
            st.markdown(line)

# ==================== TAB 2: Job Descriptions ====================
with tab2:
    st.subheader("Add Job Description")

    with st.form("job_form", clear_on_submit=True):
        title = st.text_input("Job Title", placeholder="e.g., Senior Frontend Developer")
        description = st.text_area("Job Description", height=200, placeholder="Paste the full job description here...")
        jd_doc = st.file_uploader("...or upload it (PDF or TXT)", type=["pdf", "txt"])
        submitted_jd = st.form_submit_button("Save Job Description")

    if submitted_jd:
        try:
            if jd_doc:
                r = requests.post(
                    f"{st.session_state.api_url}/jobs/upload",
                    data={"title": title},
                    files={"jd_file": (jd_doc.name, jd_doc.getvalue(), jd_doc.type)},
                    timeout=60,
                )
            else:
                r = requests.post(
                    f"{st.session_state.api_url}/jobs",
                    json={"title": title, "description": description},
                    timeout=60,
                )
        except requests.exceptions.RequestException as e:
            st.error(f"Connection error: {e}")
            st.stop()

        if r.status_code == 200:
            st.success("✅ Job description saved!")
            st.session_state.job_list_cache = None
        else:
            st.error(f"❌ Could not save job description: {error_detail(r)}")

    st.markdown("### 📁 Saved Job Descriptions")
    saved = fetch_jobs()
    if not saved:
        st.info("No job descriptions added yet.")
    for j in saved:
        with st.expander(j["title"]):
            st.write(j["description"])
            if st.button("🗑️ Delete", key=f"delete_{j['id']}"):
                requests.delete(f"{st.session_state.api_url}/jobs/{j['id']}", timeout=30)
                st.session_state.job_list_cache = None
                st.rerun()

# ==================== TAB 3: Resume Analysis ====================
with tab3:
    st.subheader("Resume Analysis")
    analyses = st.session_state.analyses

    if st.session_state.batch_error:
        st.error(st.session_state.batch_error)

    if not analyses:
        st.info("No analysis results yet. Run a batch from the Dashboard tab.")
    else:
        c1, c2, c3 = st.columns([2, 1, 1])
        search = c1.text_input("Search candidates")
        verdict = c2.selectbox("Verdict", VERDICT_FILTERS)
        sort_label = c3.selectbox("Sort by", list(SORT_OPTIONS.values()))
        sort_by = next(k for k, v in SORT_OPTIONS.items() if v == sort_label)

        shown = filter_and_sort(analyses, search=search, verdict=verdict, sort_by=sort_by)
        table = to_dataframe(shown)
        st.dataframe(table, use_container_width=True, hide_index=True)
        st.download_button("⬇️ Export CSV", table.to_csv(index=False), file_name="resume_analysis.csv")

        if not shown:
            st.warning("No results match the current filters.")

        for a in shown:
            full = a.full_analysis
            with st.expander(f"🧑 {a.candidate_name} - {a.relevance_score:.0f}% ({a.verdict.value})"):
                st.markdown("### 🧩 Score Breakdown")
                st.table(pd.DataFrame({
                    "Metric": ["Hard Match", "Soft Match", "Relevance Score", "ATS Compatibility"],
                    "Score (%)": [
                        f"{full.hard_match_percentage:.0f}",
                        f"{full.soft_match_percentage:.0f}",
                        f"{full.relevance_score:.0f}",
                        f"{full.ats_analysis.score:.0f}",
                    ],
                }))

                st.markdown("### 📝 AI Summary")
                st.write(full.summary)

                left, right = st.columns(2)
                left.markdown("**✅ Matching Skills:** " + (", ".join(full.matching_skills) or "None identified."))
                right.markdown("**❌ Missing Skills:** " + (", ".join(full.missing_skills) or "None identified."))
                if full.missing_certifications:
                    right.markdown("**📜 Missing Certifications:** " + ", ".join(full.missing_certifications))
                if full.missing_projects:
                    right.markdown("**🛠️ Missing Projects:** " + ", ".join(full.missing_projects))

                if full.suggested_improvements:
                    st.markdown("### 💡 Suggested Improvements")
                    for s in full.suggested_improvements:
                        st.markdown(f"- {s}")

                if full.ats_analysis.issues:
                    st.markdown("### 🤖 ATS Issues")
                    for issue in full.ats_analysis.issues:
                        st.markdown(f"- {issue}")

                if full.suggested_learning_resources:
                    st.markdown("### 📚 Suggested Learning Resources")
                    for res in full.suggested_learning_resources:
                        st.markdown(f"**For \"{res.skill}\":**")
                        for link in res.links:
                            st.markdown(f"- {link}")

                if st.button("✍️ Rewrite Resume for this Job", key=f"rewrite_{a.id}"):
                    with st.spinner("Rewriting resume..."):
                        try:
                            r = requests.post(
                                f"{st.session_state.api_url}/rewrite",
                                json={"resume_text": a.resume_text, "jd_text": st.session_state.jd_text},
                            )
                        except requests.exceptions.RequestException as e:
                            st.error(f"Connection error: {e}")
                            st.stop()
                    if r.status_code == 200:
                        st.session_state.rewrites[a.id] = r.json()["rewritten"]
                    else:
                        st.error(f"❌ Rewrite failed: {error_detail(r)}")

                if a.id in st.session_state.rewrites:
                    st.text_area("Rewritten Resume", st.session_state.rewrites[a.id], height=300, key=f"rw_{a.id}")

# ==================== TAB 4: Analytics ====================
with tab4:
    st.subheader("Analytics Dashboard")
    analyses = st.session_state.analyses
    if not analyses:
        st.info("No analysis data available. Please analyze some resumes on the dashboard first.")
    else:
        st.markdown("### Verdict Distribution")
        dist = verdict_distribution(analyses)
        st.bar_chart(pd.DataFrame({"Candidates": list(dist.values())}, index=list(dist.keys())))

        st.markdown("### Most Commonly Missing Skills")
        missing = top_missing_skills(analyses)
        if missing:
            st.bar_chart(pd.DataFrame(missing, columns=["Skill", "Frequency"]).set_index("Skill"))
        else:
            st.write("No missing skills reported.")

# ==================== TAB 5: Settings ====================
with tab5:
    st.subheader("Settings")
    try:
        current = requests.get(f"{st.session_state.api_url}/settings/theme", timeout=10).json().get("theme", "light")
    except requests.exceptions.RequestException:
        current = "light"
    theme = st.radio("Theme preference", ["light", "dark"], index=0 if current == "light" else 1, horizontal=True)
    if theme != current:
        requests.put(f"{st.session_state.api_url}/settings/theme", json={"theme": theme}, timeout=10)
        st.caption("Saved. Streamlit applies the theme from its own settings menu (☰ → Settings).")

    if st.button("🧹 Clear session results"):
        st.session_state.analyses = []
        st.session_state.statuses = []
        st.session_state.batch_error = None
        st.session_state.rewrites = {}
        st.success("Session cleared.")
