"""Feature deck - thematic catalog, synthetic generator and seeded shuffle."""

from typing import TypeVar

from core.cards import CORE_ROLES, FeatureCard, Requirement, Role
from core.rng import SeededRng

T = TypeVar("T")

DEV, PM, UX = Role.DEV, Role.PM, Role.UX


def _feature(
    feature_id: str,
    name: str,
    description: str,
    total_points: int,
    *requirements: tuple[Role, int],
) -> FeatureCard:
    return FeatureCard(
        id=feature_id,
        name=name,
        description=description,
        total_points=total_points,
        requirements=tuple(Requirement(role, points) for role, points in requirements),
    )


FEATURE_CATALOG: tuple[FeatureCard, ...] = (
    _feature("F1", "Azure AD Single Sign-On", "Enable SSO integration for enterprise tenants via OpenID Connect.", 5, (DEV, 3), (PM, 2)),
    _feature("F2", "Teams Presence Sync", "Reflect real-time presence status across web and desktop clients.", 6, (DEV, 3), (UX, 1), (PM, 2)),
    _feature("F3", "Outlook Add-in Compose Pane", "Lightweight add-in panel for drafting AI assisted replies.", 4, (DEV, 3), (UX, 1)),
    _feature("F4", "SharePoint Document Version Diff", "Side-by-side visual diff for major document revisions.", 7, (DEV, 4), (UX, 1), (PM, 2)),
    _feature("F5", "OneDrive Offline Sync Optimization", "Reduce sync conflicts & bandwidth with smarter chunking.", 5, (DEV, 4), (PM, 1)),
    _feature("F6", "Teams Meeting Live Reactions", "Animated emoji reaction stream with accessibility labels.", 6, (DEV, 3), (UX, 2), (PM, 1)),
    _feature("F7", "Azure Cost Anomaly Alerting", "Detect sudden spend spikes and push notifications.", 5, (DEV, 3), (PM, 2)),
    _feature("F8", "Power BI Dark Theme Polish", "Improve contrast & theming tokens for night mode.", 4, (UX, 2), (DEV, 2)),
    _feature("F9", "M365 Unified Search Autosuggest", "Cross-product query suggestions with fuzzy matching.", 7, (DEV, 4), (PM, 2), (UX, 1)),
    _feature("F10", "Azure Functions Cold Start Reduction", "Warm pooling strategy for premium plan functions.", 6, (DEV, 5), (PM, 1)),
    _feature("F11", "Teams Channel Archive Restore", "Self-service restore flow for archived channels.", 5, (DEV, 3), (PM, 2)),
    _feature("F12", "Intune Device Compliance Badge", "Visual indicator of device health in portal.", 4, (DEV, 2), (UX, 1), (PM, 1)),
    _feature("F13", "Azure Monitor Query Snippets", "Reusable Kusto snippet library with tagging.", 5, (DEV, 3), (PM, 2)),
    _feature("F14", "Outlook Calendar Focus Time Block", "Auto-insert focus events based on meeting load.", 6, (DEV, 3), (PM, 2), (UX, 1)),
    _feature("F15", "Edge Collections Sharing", "Collaborative sharing of tab collections.", 5, (DEV, 3), (UX, 1), (PM, 1)),
    _feature("F16", "Azure DevOps Sprint Burnup Chart", "Add burnup visualization to dashboards.", 4, (DEV, 2), (PM, 2)),
    _feature("F17", "Teams Adaptive Background Blur", "Dynamic blur based on movement & lighting.", 7, (DEV, 4), (UX, 2), (PM, 1)),
    _feature("F18", "SharePoint Inline Image OCR", "Extract text metadata for search indexing.", 6, (DEV, 4), (PM, 2)),
    _feature("F19", "Azure Portal Keyboard Shortcuts", "Global nav & resource shortcuts for power users.", 5, (UX, 2), (DEV, 2), (PM, 1)),
    _feature("F20", "Teams Poll Template Library", "Pre-built poll templates for quick engagement.", 4, (PM, 2), (DEV, 2)),
    _feature("F21", "OneDrive Link Expiration Policy", "Tenant policy UI for mandatory link expirations.", 5, (DEV, 3), (PM, 2)),
    _feature("F22", "PowerPoint Live Co-Author Pointer", "Show collaborator cursor during presentations.", 6, (DEV, 3), (UX, 2), (PM, 1)),
    _feature("F23", "Azure Role Assignment Audit Export", "Scheduled export of RBAC diffs to storage.", 5, (DEV, 3), (PM, 2)),
    _feature("F24", "Defender Threat Timeline Zoom", "Zoomable incident progression visualization.", 7, (DEV, 4), (UX, 2), (PM, 1)),
    _feature("F25", "Teams Message Pinning v2", "Multiple pin slots with ordering.", 4, (DEV, 3), (PM, 1)),
    _feature("F26", "Azure Backup Restore Progress UI", "Progress & ETA indicators for restore jobs.", 5, (DEV, 3), (UX, 1), (PM, 1)),
    _feature("F27", "M365 Data Residency Report", "Export of geo storage locations per service.", 5, (PM, 3), (DEV, 2)),
    _feature("F28", "Teams Emoji Skin Tone Memory", "Persist last used tone across sessions.", 3, (DEV, 2), (UX, 1)),
    _feature("F29", "Outlook Mobile Attachment Quick Save", "One-tap save to recent OneDrive folder.", 4, (DEV, 3), (UX, 1)),
    _feature("F30", "Azure Policy Drift Detection", "Detect & flag resource config drift.", 6, (DEV, 4), (PM, 2)),
)


def generate_placeholder_deck(
    size: int | None = None,
    min_points: int = 2,
    max_points: int = 8,
) -> list[FeatureCard]:
    """
    Build a feature deck.

    Without a size this returns a copy of the thematic catalog. With a size it
    generates synthetic features whose difficulty cycles from min_points to
    max_points, with the role order rotating by index.

    Args:
        size: Number of synthetic features to generate
        min_points: Lowest difficulty in the cycle
        max_points: Highest difficulty in the cycle

    Returns:
        A new, unshuffled list of feature cards
    """
    if not size:
        return list(FEATURE_CATALOG)

    deck: list[FeatureCard] = []
    span = max_points - min_points + 1
    for i in range(size):
        difficulty = min_points + (i % span)
        role_count = 3 if difficulty >= 7 else 2 if difficulty >= 4 else 1
        offset = i % len(CORE_ROLES)
        chosen = (CORE_ROLES[offset:] + CORE_ROLES[:offset])[:role_count]

        remaining = difficulty
        requirements: list[Requirement] = []
        for idx, role in enumerate(chosen):
            roles_left = len(chosen) - idx
            if roles_left == 1:
                points = max(1, remaining)
            else:
                base = remaining - (roles_left - 1)
                points = max(1, min(3 + idx, base // roles_left + 1))
            remaining -= points
            requirements.append(Requirement(role, points))

        deck.append(
            FeatureCard(
                id=f"LG{i + 1}",
                name=f"Legacy Feature {i + 1}",
                description="Legacy placeholder feature",
                total_points=sum(r.min_points for r in requirements),
                requirements=tuple(requirements),
            )
        )
    return deck


def shuffle(cards: list[T], rng: SeededRng) -> list[T]:
    """Fisher-Yates shuffle in place, last index down. Returns the same list."""
    for i in range(len(cards) - 1, 0, -1):
        j = rng.int(i + 1)
        cards[i], cards[j] = cards[j], cards[i]
    return cards


def create_feature_deck(rng: SeededRng, base: list[FeatureCard] | None = None) -> list[FeatureCard]:
    """Shuffle a copy of the catalog (or an injected deck). Index 0 is drawn next."""
    source = list(base) if base is not None else generate_placeholder_deck()
    return shuffle(source, rng)


def draw_feature(deck: list[FeatureCard]) -> FeatureCard | None:
    """Pop the top feature, or None when the deck is exhausted."""
    if not deck:
        return None
    return deck.pop(0)
