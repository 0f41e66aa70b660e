# app/prompts/letter_prompt.py
"""
Recommendation letter prompt templates
"""


class LetterPrompts:
    """Letter generation prompts"""

    RECOMMENDATION_LETTER = """Write a detailed, specific and professional Letter of Recommendation for an applicant to a highly selective program. The letter must read as if written by someone who knows the applicant well.

APPLICANT INFORMATION:
- Name: {applicant_name}
- Target Program/Role: {target_program}
- Target Institution: {target_institution}
- Field/Domain: {field_domain}

REFERRER INFORMATION:
- Referrer Name: {referrer_name}
- Title/Position: {referrer_title}
- Email: {referrer_email}
- Institution/Company: {institution}
- Relationship to Applicant: {relationship}
- Duration Known: {duration_known}

APPLICANT QUALITIES:
- Observed Qualities: {observed_qualities}
- Specific Achievements: {achievements}
- Soft Skills/Character: {soft_traits}
{anecdote_line}
LETTER SPECIFICATIONS:
- Tone: {tone}
- Letter Type: {lor_type}
- Recommendation Strength: {recommendation_strength}

STRUCTURE (in this order):
1. Letterhead with the referrer's name, title, institution and email, followed by the date.
2. Formal salutation to the admissions or hiring committee.
3. Opening paragraph establishing the referrer's credibility and how, and for how long, they know the applicant.
4. Three to four body paragraphs covering intellectual ability, domain and technical skills, leadership and collaboration, and character, each grounded in concrete examples and outcomes.
5. A comparative assessment placing the applicant against peers the referrer has worked with.
6. A closing paragraph with an unambiguous endorsement.
7. A signature block with the referrer's full contact details.

REQUIREMENTS:
- Keep the tone {tone} throughout, in a register befitting a {referrer_title}.
- Make the {recommendation_strength} recommendation clear and compelling.
- Tailor the letter to {target_program} at {target_institution} and to a {lor_type} recommendation.
- Reflect the {duration_known} period of observation with concrete time references.
- Expand each listed quality and achievement into specific, credible detail; weave in the anecdote naturally if one is given.
- Avoid cliches, hyperbole and generic praise.
- Length: 700-900 words, body paragraphs of roughly 100-150 words.
- Output ONLY the letter text, ready to print: no commentary, no headings, no bullet points.
"""

    ANECDOTE_LINE = "- Notable Anecdote/Example: {anecdote}\n"
