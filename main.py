from __future__ import annotations
import streamlit as st
import re
import json
import pandas as pd
import numpy as np
from typing import Dict, List, Optional
import matplotlib.pyplot as plt
import networkx as nx
import io

from dseek.config import DseekConfig
from dseek.datatypes import SentenceGraph
from dseek.phrase_model import PhraseModel, PhraseModelError, load_default_model
from dseek.preprocessing import tag_sentences
from dseek.ngrams import extract_ngrams
from dseek.folding import build_candidates, fold_keyphrases, select_keyphrases, scoring_limit
from dseek.graphing import build_graph, to_networkx
from dseek.scoring import pagerank_scores, rank_sentences
from dseek.summarize import DseekResult, weight_keyphrases_sentences, generate_summary

def extract_rtf_text(rtf_content):
    """Extract plain text from RTF content."""
    # Remove RTF control words and groups
    text = re.sub(r'\\[a-z]+\d*', '', rtf_content)
    text = re.sub(r'[{}]', '', text)
    text = re.sub(r'\\\*.*?;', '', text)
    text = re.sub(r'\\[^a-z]', '', text)
    # Clean up extra whitespace
    text = re.sub(r'\s+', ' ', text)
    return text.strip()

def extract_markdown_text(md_content):
    """Extract plain text from Markdown content, keeping blank lines as paragraph breaks."""
    # Remove code blocks first so their markers don't leak into the text
    text = re.sub(r'```.*?```', '', md_content, flags=re.DOTALL)
    text = re.sub(r'`([^`]+)`', r'\1', text)
    # Remove headers
    text = re.sub(r'^#{1,6}\s+', '', text, flags=re.MULTILINE)
    # Remove bold and italic
    text = re.sub(r'\*{1,2}(.*?)\*{1,2}', r'\1', text)
    text = re.sub(r'_{1,2}(.*?)_{1,2}', r'\1', text)
    # Remove links
    text = re.sub(r'\[([^\]]+)\]\([^)]+\)', r'\1', text)
    # Remove horizontal rules
    text = re.sub(r'^-{3,}$', '', text, flags=re.MULTILINE)
    # Clean up extra whitespace
    text = re.sub(r'\n\s*\n', '\n\n', text)
    return text.strip()

def load_text_from_file(uploaded_file):
    """Load text content from uploaded file based on file type."""
    file_extension = uploaded_file.name.lower().split('.')[-1]
    content = uploaded_file.read().decode("utf-8")

    if file_extension == 'rtf':
        return extract_rtf_text(content)
    elif file_extension == 'md':
        return extract_markdown_text(content)
    else:  # txt, html fragments and other formats
        return content

def result_to_frames(result: DseekResult) -> Dict[str, pd.DataFrame]:
    """Tables shown in the app: ranked keyphrases and ranked sentences."""
    data = result.to_dict()
    keyphrases_df = pd.DataFrame(
        data["keyphrases"],
        columns=["keyphrase", "sentences", "words", "weight", "wiki", "specificity"],
    )
    sentences_df = pd.DataFrame(
        [
            {
                "Sentence #": s.idx + 1,
                "Score": s.score,
                "Keyphrases": ", ".join(s.keyphrases),
                "Text": s.text,
            }
            for s in result.top_sentences
        ],
        columns=["Sentence #", "Score", "Keyphrases", "Text"],
    )
    return {"keyphrases": keyphrases_df, "sentences": sentences_df}

def draw_sentence_graph(graph: SentenceGraph, top_indices: List[int]):
    """Draw the sentence graph; top-ranked sentences are highlighted."""
    G = to_networkx(graph)

    fig, ax = plt.subplots(figsize=(10, 8))
    ax.set_title("Sentence Graph (edges = shared keyphrase weight)", fontsize=14, fontweight='bold')

    if len(G.nodes) > 0:
        pos = nx.spring_layout(G, k=2, iterations=50, seed=42)
        others = [n for n in G.nodes if n not in top_indices]
        nx.draw_networkx_nodes(G, pos, nodelist=others, ax=ax,
                               node_color='lightblue', node_size=700, alpha=0.7)
        nx.draw_networkx_nodes(G, pos, nodelist=[n for n in top_indices if n in G], ax=ax,
                               node_color='yellow', node_size=1000, alpha=0.9)

        edges = G.edges(data=True)
        if edges:
            weights = [edge[2]['weight'] for edge in edges]
            max_weight = max(weights) if weights else 1
            edge_widths = [4 * (w / max_weight) for w in weights]
            nx.draw_networkx_edges(G, pos, ax=ax, width=edge_widths, alpha=0.6, edge_color='gray')

        labels = {i: f"S{i+1}" for i in G.nodes()}
        nx.draw_networkx_labels(G, pos, labels, ax=ax, font_size=10, font_weight='bold')

        if len(G.nodes) <= 10:
            edge_labels = {(u, v): f"{d['weight']:.1f}" for u, v, d in G.edges(data=True)}
            nx.draw_networkx_edge_labels(G, pos, edge_labels, ax=ax, font_size=8)

    ax.set_aspect('equal')
    ax.axis('off')
    plt.tight_layout()

    # Convert plot to image for Streamlit
    buf = io.BytesIO()
    plt.savefig(buf, format='png', dpi=150, bbox_inches='tight')
    buf.seek(0)
    plt.close(fig)

    return buf

def create_sidebar_controls() -> DseekConfig:
    """Create sidebar controls for parameters."""
    defaults = DseekConfig()
    st.sidebar.header("N-grams")
    min_words, max_words = st.sidebar.slider(
        "Words per keyphrase", min_value=1, max_value=8,
        value=(defaults.min_words, defaults.max_words),
    )
    min_word_length = st.sidebar.number_input(
        "Min characters per word", min_value=1, max_value=10, value=defaults.min_word_length
    )
    allow_inner_verbs = st.sidebar.checkbox(
        "Allow verbs inside keyphrases", value=defaults.allow_inner_verbs
    )

    st.sidebar.header("Ranking")
    top_percent = st.sidebar.slider(
        "Keyphrases scored for specificity", min_value=0.05, max_value=1.0,
        value=defaults.top_keyphrases_percent, step=0.05,
        help="Fraction of folded keyphrases checked against the phrase model",
    )
    limit_sentences = st.sidebar.number_input(
        "Top sentences", min_value=1, max_value=50, value=defaults.limit_top_sentences
    )
    limit_keyphrases = st.sidebar.number_input(
        "Top keyphrases", min_value=1, max_value=100, value=defaults.limit_top_keyphrases
    )
    longest_first = st.sidebar.checkbox(
        "Longest phrase match first", value=defaults.longest_match_first
    )
    query = st.sidebar.text_input("Bias towards keyphrase", value="")

    return DseekConfig(
        max_words=int(max_words),
        min_words=int(min_words),
        min_word_length=int(min_word_length),
        top_keyphrases_percent=float(top_percent),
        limit_top_sentences=int(limit_sentences),
        limit_top_keyphrases=int(limit_keyphrases),
        heavy_weight_query=query.strip().lower(),
        allow_inner_verbs=allow_inner_verbs,
        longest_match_first=longest_first,
    )

def load_model(uploaded_model) -> Optional[PhraseModel]:
    if uploaded_model is None:
        return load_default_model()
    try:
        return PhraseModel.from_string(uploaded_model.read().decode("utf-8"))
    except PhraseModelError as e:
        st.error(f"Invalid phrase model: {e}")
        return None

def debug_pipeline(text: str, cfg: DseekConfig, model: PhraseModel) -> DseekResult:
    """Run the pipeline step by step, showing the intermediate results."""

    # Step 1: Tagging
    st.header("Step 1: Sentences & Tags")
    with st.expander("Tagging Details", expanded=True):
        with st.spinner("Tagging text..."):
            sentences = tag_sentences(text)
        st.success(f"Tagged {len(sentences)} sentences")

        col1, col2 = st.columns(2)
        with col1:
            st.metric("Total Sentences", len(sentences))
        with col2:
            st.metric("Paragraphs", sum(1 for s in sentences if s.starts_paragraph))

        sentences_data = []
        for s in sentences:
            nouns = [t.normal for t in s.terms if t.is_noun]
            sentences_data.append({
                "Sentence #": s.idx + 1,
                "Text": s.text[:80] + "..." if len(s.text) > 80 else s.text,
                "Terms": len(s.terms),
                "Nouns": ", ".join(nouns[:8]) + ("..." if len(nouns) > 8 else ""),
                "Starts Paragraph": "✅" if s.starts_paragraph else "",
            })
        st.dataframe(pd.DataFrame(sentences_data), use_container_width=True)

    # Step 2: N-grams
    st.header("Step 2: Noun-edge N-grams")
    with st.expander("N-gram Details", expanded=False):
        table = extract_ngrams(sentences, cfg.min_words, cfg.max_words,
                               cfg.min_word_length, cfg.allow_inner_verbs)
        st.success(f"Mined {len(table)} candidates")
        grams_df = pd.DataFrame(
            [{"N-gram": t, "Words": n, "Sentences": ", ".join(str(i + 1) for i in idxs)}
             for (t, n), idxs in table.items()],
            columns=["N-gram", "Words", "Sentences"],
        )
        st.dataframe(grams_df, use_container_width=True, height=250)

    # Step 3: Folding
    st.header("Step 3: Folding & Specificity")
    with st.expander("Keyphrase Details", expanded=True):
        folded = fold_keyphrases(build_candidates(table))
        keyphrases = select_keyphrases(table, model, cfg)

        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Folded Keyphrases", len(folded))
        with col2:
            st.metric("Scored", scoring_limit(len(folded), cfg))
        with col3:
            weights = [k.weight for k in keyphrases]
            st.metric("Mean Weight", f"{np.mean(weights):.2f}" if weights else "0")

        st.dataframe(pd.DataFrame([
            {"Keyphrase": k.text, "Words": k.words, "Weight": round(k.weight, 3),
             "Specificity": round(k.specificity or 0.0, 3), "Entity": "✅" if k.is_entity else "",
             "Sentences": ", ".join(str(i + 1) for i in k.sentences)}
            for k in keyphrases
        ]), use_container_width=True)

    # Step 4: Graph & ranking
    st.header("Step 4: Sentence Graph & Centrality")
    with st.expander("Graph Details", expanded=True):
        graph = build_graph(sentences, keyphrases)
        scores = pagerank_scores(graph)
        ranked = rank_sentences(graph)

        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Nodes (Sentences)", len(graph.nodes))
        with col2:
            st.metric("Edges", len(graph.edges))
        with col3:
            max_possible_edges = len(graph.nodes) * (len(graph.nodes) - 1) // 2
            density = len(graph.edges) / max_possible_edges if max_possible_edges > 0 else 0
            st.metric("Graph Density", f"{density:.2%}")

        if graph.edges:
            st.dataframe(pd.DataFrame([
                {"From": f"S{e.i+1}", "To": f"S{e.j+1}", "Weight": f"{e.weight:.3f}"}
                for e in graph.edges
            ]), use_container_width=True)
        else:
            st.warning("No sentences share a keyphrase; all sentences keep the same score")

        if scores:
            st.write(f"Score spread: min {np.min(scores):.4f}, max {np.max(scores):.4f}, "
                     f"std {np.std(scores):.4f}")

        top = ranked[:cfg.limit_top_sentences]
        if len(graph.nodes) <= 50:
            try:
                with st.spinner("Generating graph visualization..."):
                    image = draw_sentence_graph(graph, [s.idx for s in top])
                st.image(image, caption="Yellow nodes are the top-ranked sentences",
                         use_column_width=True)
            except Exception as e:
                st.error(f"Could not generate graph visualization: {str(e)}")
        else:
            st.info(f"Graph too large to visualize ({len(graph.nodes)} nodes).")

    return DseekResult(
        top_sentences=top,
        keyphrases=keyphrases[:cfg.limit_top_keyphrases],
        sentences=[s.text for s in sentences],
        graph=graph,
    )

def main():
    st.title("DSEEK Keyphrase & Sentence Ranker")
    st.write("Upload a document to find its keyphrases and the sentences that tie them together")

    cfg = create_sidebar_controls()
    st.sidebar.header("Debug Options")
    debug_mode = st.sidebar.checkbox("Enable Debug Mode", value=False, help="Show detailed pipeline steps")

    uploaded_model = st.sidebar.file_uploader("Phrase model (JSON)", type=['json'])
    uploaded_file = st.file_uploader(
        "Choose a text file",
        type=['txt', 'rtf', 'md', 'html'],
        help="Upload a document (supports .txt, .rtf, .md, .html formats)"
    )

    if uploaded_file is not None:
        text = load_text_from_file(uploaded_file)
        file_extension = uploaded_file.name.lower().split('.')[-1]

        st.subheader(f"Original Text ({file_extension.upper()} format)")
        st.text_area("Content", text, height=200, disabled=True)

        if st.button("Rank Keyphrases", type="primary"):
            model = load_model(uploaded_model)
            if model is None:
                return
            try:
                if debug_mode:
                    st.markdown("---")
                    st.title("Pipeline Debug Mode")
                    result = debug_pipeline(text, cfg, model)
                else:
                    with st.spinner("Ranking..."):
                        result = weight_keyphrases_sentences(text, config=cfg, model=model)

                frames = result_to_frames(result)
                st.markdown("---")
                st.header("Top Keyphrases")
                st.dataframe(frames["keyphrases"], use_container_width=True)
                st.header("Top Sentences")
                st.dataframe(frames["sentences"], use_container_width=True)
                st.header("Summary")
                st.text_area("Top sentences in document order", generate_summary(result),
                             height=150, disabled=True)
                st.download_button("Download JSON", json.dumps(result.to_dict(), indent=2),
                                   file_name="dseek.json", mime="application/json")

            except Exception as e:
                st.error(f"Error ranking document: {str(e)}")
                st.exception(e)

if __name__ == "__main__":
    main()
