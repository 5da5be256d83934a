"""Streamlit UI for inspecting how ImpressFlow parses and places a deck."""

from __future__ import annotations

import json
import re
import textwrap
from typing import Any, Dict, List, Optional

import streamlit as st

from impressflow.config import Settings, configure_logging, load_settings
from impressflow.deck_plan import DeckPlan, plan_deck
from impressflow.exceptions import ImpressFlowError
from impressflow.frontmatter import extract_frontmatter
from impressflow.layouts import extract_layout_content
from impressflow.positioning import default_config, layout_names
from impressflow.slide_splitter import split_slides

TAG_RE = re.compile(r"<[^>]+>")

SAMPLE_DECK = textwrap.dedent(
    """\
    ---
    title: ImpressFlow
    theme: tech-dark
    ---

    # Write in Markdown
    ::: transform-appear
    Most presentation tools are >>>boring<<< and >>>flat<<<.
    :::
    ^

    # Present in 3D
    ::: two-column
    ### Parse
    Frontmatter, slides, layouts
    ### Place
    Spiral, grid, sphere and more
    :::

    ---

    > Every presentation tells a story.

    # Thank you
    """
)


def _extract_slide_excerpt(html: str, *, max_width: int = 60) -> str:
    """Return a short plain-text label for a rendered slide."""

    excerpt = " ".join(TAG_RE.sub(" ", html).split())
    if not excerpt:
        return "(empty)"
    return textwrap.shorten(excerpt, width=max_width, placeholder="…")


def _parse_config_json(raw: str) -> Optional[Dict[str, Any]]:
    """Parse the layout config editor; blank input means defaults."""

    if not raw or not raw.strip():
        return None
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("Layout config must be a JSON object")
    return data


def _positions_rows(plan: DeckPlan) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    for slide, position in plan.slide_positions():
        row: Dict[str, Any] = {
            "slide": slide.index + 1,
            "title": slide.title or _extract_slide_excerpt(slide.content),
            "layout": slide.layout.value,
        }
        row.update({key: round(value, 2) for key, value in position.to_dict().items()})
        rows.append(row)
    return rows


@st.cache_resource(show_spinner=False)
def load_resources() -> Settings:
    """Load settings from the environment and set up logging once."""

    settings = load_settings()
    configure_logging(settings)
    return settings


def main() -> None:
    st.set_page_config(page_title="ImpressFlow Deck Inspector", layout="wide")
    st.title("ImpressFlow Deck Inspector")

    settings = load_resources()
    st.session_state.setdefault("markdown", SAMPLE_DECK)

    with st.sidebar:
        st.header("Placement")
        names = layout_names()
        layout = st.selectbox(
            "Layout",
            names,
            index=names.index(settings.layout) if settings.layout in names else 0,
        )
        use_document_layout = st.checkbox(
            "Use the layout from the frontmatter when present",
            value=False,
        )
        st.caption("Defaults for this layout")
        st.json(default_config(layout).to_dict())
        config_text = st.text_area(
            "Layout config (JSON, optional)",
            height=120,
            placeholder='{"startRadius": 800}',
        )
        uploaded = st.file_uploader("Load a Markdown deck", type=["md", "markdown", "txt"])
        if uploaded is not None:
            st.session_state["markdown"] = uploaded.getvalue().decode("utf-8")

    markdown_text = st.text_area("Markdown", key="markdown", height=320)

    try:
        config = _parse_config_json(config_text)
    except ValueError as exc:
        st.error(f"Invalid layout config: {exc}")
        return

    try:
        plan = plan_deck(
            markdown_text,
            layout=None if use_document_layout else layout,
            config=config,
            settings=settings,
        )
    except ImpressFlowError as exc:
        st.error(str(exc))
        return

    frontmatter = plan.ast.frontmatter
    st.subheader(frontmatter.title or "Untitled deck")
    st.caption(
        f"{len(plan.ast.slides)} slides · theme {frontmatter.theme} · "
        f"{frontmatter.aspect_ratio} · {plan.layout_name.value} layout"
    )

    if not plan.ast.slides:
        st.info("The document has no slides yet.")
        return

    st.markdown("#### Poses")
    st.dataframe(_positions_rows(plan), use_container_width=True)
    st.markdown("**Overview pose**")
    st.json(plan.overview.to_dict())

    st.markdown("#### Slides")
    _, body = extract_frontmatter(markdown_text)
    sources = split_slides(body)
    tabs = st.tabs([f"{slide.index + 1}. {slide.title or slide.layout.value}" for slide in plan.ast.slides])
    for tab, slide in zip(tabs, plan.ast.slides):
        with tab:
            st.markdown(f"**Layout**: `{slide.layout.value}`")
            if plan.ast.directions:
                st.markdown(f"**Next slide goes**: {plan.ast.directions[slide.index].value}")
            if slide.notes:
                st.info(f"Speaker notes: {slide.notes}")
            if slide.images:
                st.markdown("**Image requests**")
                for image in slide.images:
                    st.markdown(f"- #{image.image_index}: {image.prompt}")
            if slide.index < len(sources):
                layout_content = extract_layout_content(sources[slide.index])
                if layout_content.columns:
                    columns = st.columns(len(layout_content.columns))
                    for column, text in zip(columns, layout_content.columns):
                        column.code(text or "(empty)", language="markdown")
            st.markdown("**Rendered HTML**")
            st.code(slide.content, language="html")

    st.download_button(
        "Download deck plan (JSON)",
        data=json.dumps(plan.to_dict(), ensure_ascii=False, indent=2).encode("utf-8"),
        file_name="deck_plan.json",
        mime="application/json",
    )


if __name__ == "__main__":  # pragma: no cover - Streamlit handles execution
    main()
