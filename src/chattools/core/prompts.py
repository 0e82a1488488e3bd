"""Prompt templates written next to the chunk files."""

CHUNK_SUMMARY_PROMPT = """\
Please summarize this chunk as a **Checkpoint Summary** with:
1) Context Recap (why this exists; what's inside),
2) Key Insights & Decisions (detailed, not superficial),
3) My Personal Experiences & Feelings (preserve the nuance),
4) Open Questions / Pending Work,
5) Continuation Instructions (what the next stage should assume).
Keep it faithful and specific; do not drop personal reflections.
"""

MASTER_MERGE_PROMPT = """\
I have multiple checkpoint summaries from a long conversation.
Please combine them into a **Master Summary** that:
- Preserves the logical flow and chronology,
- Keeps all important decisions and insights,
- Retains my personal experiences and emotional context,
- Lists all open questions/pending tasks,
- Ends with clear Continuation Instructions.
Target length: 1,500-2,500 words.
"""


def render_prompts() -> str:
    return (
        "=== Per-Chunk Summary Prompt (copy for each part) ===\n"
        + CHUNK_SUMMARY_PROMPT
        + "\n\n=== Master Summary Merge Prompt (after all chunks are summarized) ===\n"
        + MASTER_MERGE_PROMPT
    )
