# prompts/extraction.py
# Prompt for turning aggregated label OCR text into one product record.

def build_extraction_prompt(corpus: str) -> str:
    """
    Embeds the OCR corpus, the five-field schema and the date rules.
    Date interpretation is left to the model; nothing here re-parses dates.
    """
    return f"""
You are a food product label analyzer. Analyze the following text extracted from product labels and return a JSON object.

Extract:
1. Product Name - the main product name (brand + product if both are visible)
2. Manufacturing Date - in YYYY-MM-DD format (look for "Mfg", "MFD", "Manufacturing", "Made on", "Packed on", "PKD")
3. Expiry Date - in YYYY-MM-DD format (look for "Exp", "Expiry", "Best before", "BB", "Use by", "Best before end")
4. Ingredients - array of individual ingredients, in label order
5. Nutritional Information - object with the nutrients found (name -> value with unit)

TEXT FROM LABELS:
{corpus}

DATE RULES:
- Convert every date to YYYY-MM-DD.
- Numeric dates where day and month are both <= 12 are ambiguous: read them DAY-FIRST (DD/MM/YYYY)
  unless the label itself shows month-first (e.g. a US address, or another date on the label with day > 12 in the second position).
- If only month and year are given, use the first day of the month ("Dec 2025" = "2025-12-01", "12/25" = "2025-12-01").
- Two-digit years are 20YY.
- OCR often confuses characters: 0/O, 1/I/l, 5/S, 8/B, 2/Z. Repair them inside dates and numbers when the intent is clear.
- If a date is missing or cannot be resolved, use null. Never guess a date that is not printed.

OTHER RULES:
- Extract ALL ingredients mentioned; split on commas/semicolons but keep bracketed sub-ingredients with their parent.
- Do not invent nutrients; leave the object empty if no nutrition table is present.

Return ONLY valid JSON with this exact structure:
{{
  "productName": "string or null",
  "mfgDate": "YYYY-MM-DD or null",
  "expDate": "YYYY-MM-DD or null",
  "ingredients": ["ingredient1", "ingredient2"] or [],
  "nutrition": {{
    "calories": "value",
    "protein": "value",
    "carbs": "value"
  }} or {{}}
}}
""".strip()
