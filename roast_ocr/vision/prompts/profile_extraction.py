"""Profile-screenshot extraction prompt for the vision providers."""

# Value of the "error" key the model returns when the image is not a profile
PROFILE_NOT_RECOGNIZED_ERROR = "Not a LinkedIn profile"


PROFILE_EXTRACTION_PROMPT = """Analyze this LinkedIn profile screenshot and extract structured data.

Return ONLY valid JSON in this exact format (no markdown, no code blocks, no explanation):
{
  "headline": "exact headline text or null",
  "about": "full about section text or null",
  "experiences": [
    {
      "title": "job title",
      "company": "company name",
      "duration": "time period",
      "description": "full description with bullet points"
    }
  ],
  "skills": ["skill1", "skill2", "skill3"],
  "education": [
    {
      "degree": "degree name",
      "school": "school name",
      "year": "graduation year"
    }
  ]
}

EXTRACTION RULES:
- Extract text EXACTLY as written (preserve capitalization, punctuation)
- For experiences: capture title, company, dates, and full description
- For skills: list all visible skills (ignore endorsement counts)
- If a section is not visible, use null or empty array
- Focus only on text content, ignore images/icons
- Ignore connection count, follower count, post count

If this is NOT a LinkedIn profile screenshot, return: {"error": "%s"}

Extract the data now as JSON:""" % PROFILE_NOT_RECOGNIZED_ERROR
