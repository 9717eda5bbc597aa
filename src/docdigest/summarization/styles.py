# src/docdigest/summarization/styles.py

"""Instruction blocks that condition the section prompt.

Each style has one instruction block and one closing reminder.
"""

from .models import DetailLevel, OutputLanguage, SummaryStyle

STYLE_INSTRUCTIONS: dict[SummaryStyle, str] = {
    SummaryStyle.ONE_PAGE: (
        "Create a concise overview that captures the essence of the content in "
        "500-1000 words maximum. Focus on the most important insights and conclusions."
    ),
    SummaryStyle.FULL_CONTEXT: """\
Create a high-fidelity summary that preserves ALL important concepts, arguments, definitions, mechanisms, and conclusions. Remove only:
- Repeated examples that don't add new information
- Filler stories without substantive meaning
- Long anecdotes that don't advance the argument
- Redundant rephrasings
Maintain the logical flow and structure of the original.""",
    SummaryStyle.ELI5: """\
Explain this content as if explaining to a 5-year-old child. Use:
- Simple, everyday language (avoid jargon)
- Concrete analogies and relatable examples
- Short sentences and clear structure
- Focus on helping someone with no background understand the core ideas""",
    SummaryStyle.STUDY_NOTES: """\
Create comprehensive study notes with:
- Bullet points organized by key topics
- Important definitions clearly stated
- Main concepts with supporting details
- Relationships between ideas
Format for easy review and memorization.""",
    SummaryStyle.ACTIONABLE_TAKEAWAYS: """\
Extract practical, actionable insights:
- Decisions that can be made
- Steps that can be taken
- Frameworks that can be applied
- Specific recommendations or best practices
Focus on what readers can DO with this information.""",
    SummaryStyle.FLASHCARDS: """\
Create Q&A pairs suitable for memorization:
- Each question should test understanding of one concept
- Answers should be clear and concise
- Cover key facts, definitions, and relationships
Format each as "Q: [question]
A: [answer]\"""",
    SummaryStyle.EXECUTIVE_BRIEF: """\
Create a high-level executive summary (3-5 minute read) that:
- Focuses on strategic insights and implications
- Highlights key findings and conclusions
- Avoids unnecessary details
- Presents information for quick decision-making
Written for busy professionals who need the essence quickly.""",
    SummaryStyle.LECTURE_MODE: """\
Teach this content step-by-step like a tutor:
- Break down complex ideas into simple building blocks
- Use clear examples for each concept
- Explain the "why" behind ideas, not just the "what"
- Build from fundamentals to more advanced points
- Check understanding with rhetorical questions
Guide the reader through learning the material.""",
}

STYLE_REMINDERS: dict[SummaryStyle, str] = {
    SummaryStyle.ONE_PAGE: "Focus on the big picture and most impactful insights.",
    SummaryStyle.FULL_CONTEXT: (
        "Preserve all important information - completeness over brevity."
    ),
    SummaryStyle.ELI5: "Keep it simple and relatable for a complete beginner.",
    SummaryStyle.STUDY_NOTES: "Organize for easy learning and review.",
    SummaryStyle.ACTIONABLE_TAKEAWAYS: (
        "Focus on practical application and action items."
    ),
    SummaryStyle.FLASHCARDS: "Make questions clear and answers memorable.",
    SummaryStyle.EXECUTIVE_BRIEF: "Strategic insights for decision-makers.",
    SummaryStyle.LECTURE_MODE: (
        "Teach clearly and progressively build understanding."
    ),
}

DETAIL_INSTRUCTIONS: dict[DetailLevel, str] = {
    DetailLevel.SHORT: (
        "Aim for ~30% of the original length. Be very selective about what to include."
    ),
    DetailLevel.MEDIUM: (
        "Aim for ~50% of the original length. Balance between brevity and completeness."
    ),
    DetailLevel.HIGH: (
        "Aim for ~70% of the original length. Preserve most details and nuances."
    ),
}

LANGUAGE_INSTRUCTIONS: dict[OutputLanguage, str] = {
    OutputLanguage.ENGLISH: "Write your response in clear, professional English.",
    OutputLanguage.PERSIAN: (
        "IMPORTANT: Write your entire response in Persian (Farsi). "
        "Use proper Persian grammar and vocabulary."
    ),
}

OMISSION_CHECK = """
## Nothing Important Lost Check

[List any concepts, definitions, or arguments that might have been omitted or oversimplified. If nothing important was lost, state "No significant omissions."]
"""
