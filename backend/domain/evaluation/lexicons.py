"""
Keyword lists used by the heuristic scorers
"""

QUALITY_KEYWORDS = ["high quality", "detailed", "professional", "premium", "polished"]

IMAGE_STYLE_KEYWORDS = ["modern", "elegant", "minimalist", "bold", "vibrant"]

IMAGE_COLOR_KEYWORDS = ["red", "blue", "green", "yellow", "orange", "purple"]

COMPOSITION_KEYWORDS = ["composition", "layout", "centered", "symmetrical"]

DEGRADING_PHRASES = ["low quality", "blurry"]

PROFESSIONAL_WORDS = ["innovative", "professional", "seamless", "efficient", "experience", "solution"]

NEGATIVE_PROMPT_KEYWORDS = [
    "low quality",
    "blurry",
    "distorted",
    "watermark",
    "text overlay",
    "unprofessional",
    "amateur",
    "pixelated",
    "artifacts",
]

# Marketing readability
POWER_WORDS = frozenset([
    "free", "new", "now", "instant", "instantly", "exclusive", "proven", "guaranteed",
    "discover", "transform", "powerful", "amazing", "save", "easy", "unlock", "boost",
    "ultimate", "best", "secret", "today", "limited", "results", "effortless",
    "revolutionary", "breakthrough", "essential", "premium", "bonus",
])

CTA_PATTERNS = [
    r"get started", r"sign up", r"buy now", r"shop now", r"order now", r"learn more",
    r"try (?:it )?(?:now|today|free|for free)", r"join (?:now|today|us)", r"subscribe",
    r"download", r"register", r"book (?:a|your)", r"claim", r"contact us",
    r"start (?:now|today|your)", r"call (?:now|today)", r"get (?:your|instant|access)",
]

# Marketing tone
URGENCY_PHRASES = [
    "now", "today", "hurry", "limited", "expires", "expiring", "deadline", "instant",
    "immediately", "last chance", "don't miss", "before it's gone", "ends", "only",
    "tonight", "while supplies last",
]

BENEFIT_PHRASES = [
    "save", "saves", "gain", "more", "results", "improve", "transform", "boost", "grow",
    "easier", "easy", "faster", "benefit", "achieve", "effortless", "less effort",
    "you'll", "free", "better", "increase",
]

SOCIAL_PROOF_PHRASES = [
    "trusted", "thousands", "millions", "customers", "award-winning", "award", "certified",
    "join", "satisfied", "rated", "reviews", "testimonials", "proven", "leading",
    "recommended", "loved by", "best-selling",
]

EMOTIONAL_PHRASES = [
    "love", "frustrated", "overwhelmed", "finally", "dreaming", "dream", "imagine",
    "feel", "feeling", "happy", "joy", "fear", "worry", "stress", "excited", "delight",
    "proud", "confident", "peace of mind", "struggle",
]

# Sentiment
POSITIVE_WORDS = frozenset([
    "good", "great", "excellent", "amazing", "wonderful", "fantastic", "outstanding",
    "brilliant", "superb", "perfect", "love", "best", "happy", "beautiful", "innovative",
    "exciting", "powerful", "success", "successful", "premium", "quality", "professional",
    "trusted", "reliable", "efficient", "effective", "impressive", "remarkable",
    "exceptional", "superior",
])

NEGATIVE_WORDS = frozenset([
    "bad", "poor", "terrible", "awful", "horrible", "worst", "hate", "disappointing",
    "failed", "failure", "problem", "issue", "difficult", "complicated", "confusing",
    "expensive", "slow", "broken", "error", "mistake", "wrong", "weak", "limited",
    "frustrating", "annoying",
])
