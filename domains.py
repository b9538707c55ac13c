"""
COMPANY NAME -> DOMAIN / WIKIPEDIA TITLE
---------------------------------------------------------
Turns a free-text company name into the domain and the
Wikipedia article title used to look up its logo.

Curated tables are checked first; anything else goes through
a best-effort guess that is never verified.
"""

import re
from dataclasses import dataclass
from types import MappingProxyType

# ========== KNOWN DOMAINS ==========
KNOWN_DOMAINS = MappingProxyType({
    # Tech & media
    "apple": "apple.com",
    "google": "google.com",
    "microsoft": "microsoft.com",
    "amazon": "amazon.com",
    "facebook": "facebook.com",
    "meta": "meta.com",
    "netflix": "netflix.com",
    "twitter": "twitter.com",
    "x": "x.com",
    "instagram": "instagram.com",
    "linkedin": "linkedin.com",
    "spotify": "spotify.com",
    "uber": "uber.com",
    "airbnb": "airbnb.com",
    "disney": "disney.com",
    "hbo": "hbo.com",
    "youtube": "youtube.com",
    "tiktok": "tiktok.com",
    "snapchat": "snapchat.com",
    "reddit": "reddit.com",
    "twitch": "twitch.tv",
    "slack": "slack.com",
    "zoom": "zoom.us",
    "dropbox": "dropbox.com",
    "stripe": "stripe.com",
    "paypal": "paypal.com",
    "square": "squareup.com",
    "shopify": "shopify.com",
    "salesforce": "salesforce.com",
    "oracle": "oracle.com",
    "ibm": "ibm.com",
    "intel": "intel.com",
    "amd": "amd.com",
    "nvidia": "nvidia.com",
    "samsung": "samsung.com",
    "sony": "sony.com",
    "lg": "lg.com",
    "dell": "dell.com",
    "hp": "hp.com",
    "lenovo": "lenovo.com",
    "cisco": "cisco.com",
    "adobe": "adobe.com",
    "atlassian": "atlassian.com",
    "github": "github.com",
    "gitlab": "gitlab.com",
    "notion": "notion.so",
    "figma": "figma.com",
    "canva": "canva.com",
    "openai": "openai.com",
    "anthropic": "anthropic.com",
    "vercel": "vercel.com",
    "heroku": "heroku.com",
    "aws": "aws.amazon.com",
    "google cloud": "cloud.google.com",
    "azure": "azure.microsoft.com",
    "digitalocean": "digitalocean.com",
    # Consumer brands
    "nike": "nike.com",
    "adidas": "adidas.com",
    "coca-cola": "coca-cola.com",
    "cocacola": "coca-cola.com",
    "coke": "coca-cola.com",
    "pepsi": "pepsi.com",
    "pepsico": "pepsico.com",
    "mcdonald's": "mcdonalds.com",
    "mcdonalds": "mcdonalds.com",
    "starbucks": "starbucks.com",
    "walmart": "walmart.com",
    "target": "target.com",
    "costco": "costco.com",
    "tesla": "tesla.com",
    "ford": "ford.com",
    "toyota": "toyota.com",
    "honda": "honda.com",
    "bmw": "bmw.com",
    "mercedes": "mercedes-benz.com",
    "mercedes-benz": "mercedes-benz.com",
    # Consulting
    "mckinsey": "mckinsey.com",
    "mckinsey & company": "mckinsey.com",
    "bcg": "bcg.com",
    "boston consulting group": "bcg.com",
    "bain": "bain.com",
    "bain & company": "bain.com",
    "deloitte": "deloitte.com",
    "pwc": "pwc.com",
    "pricewaterhousecoopers": "pwc.com",
    "ey": "ey.com",
    "ernst & young": "ey.com",
    "kpmg": "kpmg.com",
    "accenture": "accenture.com",
    "roland berger": "rolandberger.com",
    "oc&c": "occstrategy.com",
    "oc&c strategy consultants": "occstrategy.com",
    "oliver wyman": "oliverwyman.com",
    "kearney": "kearney.com",
    "booz allen": "boozallen.com",
    "booz allen hamilton": "boozallen.com",
    # Retail
    "tesco": "tesco.com",
    "ikea": "ikea.com",
    "tiffany": "tiffany.com",
    "tiffany & co": "tiffany.com",
    # AI
    "perplexity": "perplexity.ai",
    "perplexity ai": "perplexity.ai",
    "mistral": "mistral.ai",
    "mistral ai": "mistral.ai",
    "cohere": "cohere.com",
    # Credit bureaus
    "transunion": "transunion.com",
    "equifax": "equifax.com",
    "experian": "experian.com",
})

# ========== KNOWN WIKIPEDIA TITLES ==========
# Only names whose article title can't be guessed by capitalising words.
KNOWN_WIKI_TITLES = MappingProxyType({
    "apple": "Apple_Inc.",
    "google": "Google",
    "amazon": "Amazon_(company)",
    "meta": "Meta_Platforms",
    "facebook": "Facebook",
    "x": "X_Corp.",
    "twitter": "Twitter",
    "uber": "Uber",
    "hbo": "HBO",
    "ibm": "IBM",
    "amd": "AMD",
    "hp": "Hewlett-Packard",
    "lg": "LG_Corporation",
    "aws": "Amazon_Web_Services",
    "google cloud": "Google_Cloud_Platform",
    "azure": "Microsoft_Azure",
    "digitalocean": "DigitalOcean",
    "github": "GitHub",
    "gitlab": "GitLab",
    "openai": "OpenAI",
    "paypal": "PayPal",
    "square": "Block,_Inc.",
    "tiktok": "TikTok",
    "youtube": "YouTube",
    "linkedin": "LinkedIn",
    "coca-cola": "The_Coca-Cola_Company",
    "cocacola": "The_Coca-Cola_Company",
    "coke": "The_Coca-Cola_Company",
    "pepsico": "PepsiCo",
    "mcdonald's": "McDonald's",
    "mcdonalds": "McDonald's",
    "mercedes": "Mercedes-Benz",
    "mercedes-benz": "Mercedes-Benz",
    "mckinsey": "McKinsey_&_Company",
    "mckinsey & company": "McKinsey_&_Company",
    "bcg": "Boston_Consulting_Group",
    "boston consulting group": "Boston_Consulting_Group",
    "bain": "Bain_&_Company",
    "bain & company": "Bain_&_Company",
    "pwc": "PwC",
    "pricewaterhousecoopers": "PwC",
    "ey": "EY_(company)",
    "ernst & young": "EY_(company)",
    "kpmg": "KPMG",
    "oc&c": "OC&C_Strategy_Consultants",
    "oc&c strategy consultants": "OC&C_Strategy_Consultants",
    "kearney": "Kearney_(consulting_firm)",
    "booz allen": "Booz_Allen_Hamilton",
    "ikea": "IKEA",
    "tiffany": "Tiffany_&_Co.",
    "tiffany & co": "Tiffany_&_Co.",
    "perplexity": "Perplexity_AI",
    "mistral": "Mistral_AI",
    "mistral ai": "Mistral_AI",
    "cohere": "Cohere",
    "transunion": "TransUnion",
})


@dataclass(frozen=True)
class Identity:
    company: str
    domain: str
    wiki_title: str


def _lookup_key(company):
    return company.strip().lower()


def company_to_domain(company):
    """Best-guess domain for a company name. Always returns a string."""
    normalized = _lookup_key(company)

    if normalized in KNOWN_DOMAINS:
        return KNOWN_DOMAINS[normalized]

    # already looks like a domain
    if "." in normalized:
        return normalized

    cleaned = re.sub(r"[^a-z0-9\s-]", "", normalized)
    cleaned = re.sub(r"\s+", "", cleaned)
    cleaned = re.sub(r"-+", "", cleaned)
    return f"{cleaned}.com"


def company_to_wiki_title(company):
    """Best-guess Wikipedia article title, e.g. 'bank of america' -> 'Bank_Of_America'."""
    key = _lookup_key(company)
    if key in KNOWN_WIKI_TITLES:
        return KNOWN_WIKI_TITLES[key]

    words = company.strip().split(" ")
    return "_".join(w[:1].upper() + w[1:] for w in words)


def resolve_identity(company):
    return Identity(
        company=company,
        domain=company_to_domain(company),
        wiki_title=company_to_wiki_title(company),
    )
