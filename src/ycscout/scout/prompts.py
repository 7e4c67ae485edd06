"""Extraction instruction for the Y Combinator company directory."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Instruction template. ``{query}`` and ``{count}`` are filled in by
# ``build_instruction``; the rules are advisory to the remote model and are
# not verified locally.
# ---------------------------------------------------------------------------

EXTRACTION_INSTRUCTION_TEMPLATE = """\
Based on this query: "{query}", find and extract EXACTLY {count} companies from \
Y Combinator that match ALL criteria in the query.

CRITICAL REQUIREMENTS:
- You MUST extract exactly {count} companies, no more, no less
- ALL companies MUST match the query criteria. If the query mentions a location \
(e.g., "Boston", "San Francisco", "New York"), ALL {count} companies MUST be from that location
- If the query mentions an industry or category, ALL {count} companies MUST be in that industry/category

FILTERING INSTRUCTIONS:
- Use the SEARCH BAR at the top of the page to search for location names, company names, \
or keywords from the query
- If the query mentions a location, use the "Region" filter in the sidebar to narrow down \
results (e.g., select "America / Canada" for US cities like Boston, San Francisco)
- Use other filters (Industry, Batch, etc.) as needed to match the query criteria
- After applying filters/search, verify the results match the query before extracting

EXTRACTION REQUIREMENTS:
- If you don't see {count} matching companies on the first page, scroll down or click \
"Load More" to see more results
- DO NOT include companies that don't match the query criteria, even if you need to search \
more thoroughly
- If there truly aren't {count} companies that match, return the ones that do match \
(but try very hard to find {count})

IMPORTANT: For each company, you MUST click into their individual company page to find their \
website URL. The website URL is typically not visible on the main companies list page.

For each company:
1. Click on the company name or company card to open their individual page
2. Extract the website URL from their company page (look for "Visit website", "Website" \
links, or displayed URLs)
3. Verify the company's location matches the query (if location is specified in query)
4. Go back to the companies list page
5. Repeat until you have exactly {count} companies that ALL match the query

Extract for each company:
- Company name
- A brief description of what they do
- Their website URL (from the company's individual page)
- Their location (city, state, country, or "Remote" - if not available, leave null)
- Whether they are a public company (true/false - look for IPO status, public trading \
indicators, or "Public" labels. If not found, leave null)
- Their Y Combinator batch (e.g., "Summer 2024", "Winter 2023") if available \
(if not found, leave null)

VERY IMPORTANT: Before including a company in the results, verify it matches the query. \
If the query says "Boston companies", check that the company's location includes "Boston".

Remember: return exactly {count} companies in the results array, and ALL of them must \
match the query criteria."""


def build_instruction(query: str, count: int = 5) -> str:
    """Render the extraction instruction for *query*.

    Args:
        query: The user's free-text query, embedded verbatim.
        count: How many companies to ask the model for.
    """
    return EXTRACTION_INSTRUCTION_TEMPLATE.format(query=query, count=count)
