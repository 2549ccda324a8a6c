"""Post-screenshot extraction prompt for the vision providers."""

# Exact string the model returns when the image is not a post
POST_NOT_RECOGNIZED_MARKER = "ERROR: Not a LinkedIn post"


POST_EXTRACTION_PROMPT = f"""Extract all text from this LinkedIn post screenshot.

RULES:
- Return ONLY the post text, nothing else
- Preserve line breaks and formatting exactly
- Ignore engagement metrics (likes, comments, shares, views)
- Ignore profile pictures, names, and timestamps
- Ignore "Repost" or "Shared by" text
- If you see hashtags, include them
- If you see emojis, include them
- Do NOT add any preamble or explanation

If this is NOT a LinkedIn post screenshot, return exactly: "{POST_NOT_RECOGNIZED_MARKER}"

Extract the post text now:"""
