import json

import streamlit as st

from codequality.core.containers import build_analysis_service, build_llm_registry
from codequality.core.errors import AnalysisError
from codequality.detection.detector import detect_language
from codequality.domain.models import FEATURES, LANGUAGE_LABELS, LANGUAGES
from codequality.domain.schemas import ProviderConfig
from codequality.services.upload_service import UploadService

AUTO_DETECT = "auto"

PRIVACY_NOTICE = (
    "🔒 Your API key is kept only in this browser session's memory. It is never stored, "
    "and is sent only to the AI provider you choose."
)


@st.cache_resource
def _service():
    return build_analysis_service()


@st.cache_resource
def _registry():
    return build_llm_registry()


# ---------- Renderers ----------

def _records(items: list) -> list[dict]:
    """Dict items for structured rendering; anything else is shown as-is."""
    records = []
    for item in items:
        if isinstance(item, dict):
            records.append(item)
        else:
            st.write(item)
    return records


def _as_list(value) -> list:
    return value if isinstance(value, list) else []


def _metric_row(counts: dict) -> None:
    cols = st.columns(len(counts))
    for col, (key, value) in zip(cols, counts.items()):
        col.metric(key.replace("-", " ").title(), value)


def _render_explainer(result) -> None:
    st.info(result.summary)
    for item in _records(result.explanations):
        with st.expander(f"Line {item.get('lineNumber', '?')}: {item.get('code', '')}"):
            st.write(item.get("explanation", ""))
            if item.get("why"):
                st.caption(f"Why: {item['why']}")
            for issue in _as_list(item.get("issues")):
                st.warning(issue)


def _render_bugs(result) -> None:
    st.metric("Total Issues", result.total_count)
    _metric_row(result.severity_summary)
    if not result.bugs:
        st.success("No issues found")
    for bug in _records(result.bugs):
        title = f"[{bug.get('severity', '?')}] line {bug.get('lineNumber', '?')}: {bug.get('description', '')}"
        with st.expander(title):
            st.caption(bug.get("category", ""))
            st.write(bug.get("explanation", ""))
            if bug.get("suggestedFix"):
                st.markdown("**✅ Suggested Fix:**")
                st.code(bug["suggestedFix"])


def _render_refactor(result) -> None:
    st.metric("Overall Score", result.overall_score)
    for s in _records(result.suggestions):
        with st.expander(f"[{s.get('priority', '?')}] {s.get('title', '')}"):
            st.write(s.get("description", ""))
            if s.get("impact"):
                st.caption(f"Impact: {s['impact']}")
            before, after = st.columns(2)
            before.markdown("**Before**")
            before.code(s.get("before", ""))
            after.markdown("**After**")
            after.code(s.get("after", ""))
            for benefit in _as_list(s.get("benefits")):
                st.markdown(f"- {benefit}")


def _render_smells(result) -> None:
    left, right = st.columns(2)
    left.metric("Health Score", result.overall_health_score)
    right.metric("Smells", result.total_count)
    _metric_row(result.category_summary)
    for smell in _records(result.smells):
        with st.expander(f"[{smell.get('category', '?')}] {smell.get('title', '')} (severity {smell.get('severity', '?')})"):
            st.write(smell.get("description", ""))
            st.write(smell.get("explanation", ""))
            st.markdown(f"**Remediation:** {smell.get('remediation', '')}")
            if smell.get("example"):
                st.code(smell["example"])


def _render_complexity(result) -> None:
    st.metric("Maintainability Index", result.maintainability_index)
    _metric_row(result.overall_metrics.to_dict())
    functions = _records(result.functions)
    if functions:
        st.table([{k: v for k, v in fn.items() if k != "issues"} for fn in functions])
    for rec in result.recommendations:
        st.markdown(f"- {rec}")


def _render_security(result) -> None:
    left, right = st.columns(2)
    left.metric("Security Score", result.security_score)
    right.metric("Vulnerabilities", result.total_count)
    _metric_row(result.severity_summary)
    with st.expander("OWASP categories"):
        st.table([{"category": k, "count": v} for k, v in result.category_summary.items()])
    for v in _records(result.vulnerabilities):
        with st.expander(f"[{v.get('severity', '?')}] {v.get('id', '')} {v.get('title', '')}"):
            st.caption(f"{v.get('category', '')} · line {v.get('lineNumber', '?')} · {v.get('cwe', '')}")
            st.write(v.get("description", ""))
            if v.get("codeSnippet"):
                st.code(v["codeSnippet"])
            st.markdown(f"**Impact:** {v.get('impact', '')}")
            st.markdown(f"**Remediation:** {v.get('remediation', '')}")
            for ref in _as_list(v.get("references")):
                st.markdown(f"- {ref}")
    for rec in result.recommendations:
        st.markdown(f"- {rec}")


RENDERERS = {
    "explainer": _render_explainer,
    "bugs": _render_bugs,
    "refactor": _render_refactor,
    "smells": _render_smells,
    "complexity": _render_complexity,
    "security": _render_security,
}


# ---------- Page ----------

st.set_page_config(page_title="CodeQuality", layout="wide")
st.title("CodeQuality")
st.write("AI-powered code analysis: paste or upload code, pick an analysis, choose your AI provider.")

with st.sidebar:
    st.subheader("AI Configuration")
    registry = _registry()
    provider_name = st.selectbox(
        "Provider",
        registry.list(),
        format_func=lambda n: registry.pick(n).label(),
    )
    provider = registry.pick(provider_name)
    model_ids = [m.id for m in provider.models()]
    model = st.selectbox(
        "Model",
        model_ids,
        index=model_ids.index(provider.default_model()) if provider.default_model() in model_ids else 0,
        format_func=lambda i: next(m.name for m in provider.models() if m.id == i),
    )
    api_key = st.text_input("API key", type="password", key="api_key")
    st.caption(PRIVACY_NOTICE)

uploaded_file = st.file_uploader("Upload a source file", help="Max 1MB, UTF-8 text")
if uploaded_file is not None and st.session_state.get("uploaded_name") != uploaded_file.name:
    try:
        source = UploadService.read_source(uploaded_file.name, uploaded_file.getvalue())
    except AnalysisError as e:
        st.error(str(e))
    else:
        st.session_state["code"] = source.code
        st.session_state["language"] = source.language
        st.session_state["uploaded_name"] = uploaded_file.name

code = st.text_area("Code", key="code", height=400, placeholder="Paste your code here")

language_choice = st.selectbox(
    "Language",
    [AUTO_DETECT, *LANGUAGES],
    key="language",
    format_func=lambda v: "Auto-detect" if v == AUTO_DETECT else LANGUAGE_LABELS[v],
)
if language_choice == AUTO_DETECT and code.strip():
    st.caption(f"Detected: {LANGUAGE_LABELS[detect_language(code)]}")

feature = st.radio(
    "Analysis",
    [f.value for f in FEATURES],
    format_func=lambda v: next(f.label for f in FEATURES if f.value == v),
    horizontal=True,
)
st.caption(next(f.description for f in FEATURES if f.value == feature))

if st.button("Analyze", type="primary", disabled=not code.strip()):
    config = ProviderConfig(provider=provider_name, model=model, api_key=api_key)
    with st.spinner("Analyzing..."):
        try:
            report = _service().run(
                feature,
                code,
                config,
                language=None if language_choice == AUTO_DETECT else language_choice,
            )
        except AnalysisError as e:
            st.error(f"❌ {e}")
        else:
            st.success(f"Analysis complete ({LANGUAGE_LABELS.get(report.language, report.language)})")
            RENDERERS[feature](report.result)
            st.download_button(
                label="Download JSON",
                data=json.dumps(report.to_dict(), indent=2),
                file_name=f"{feature}-analysis.json",
                mime="application/json",
            )
