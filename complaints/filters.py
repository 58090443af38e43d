from complaints.models import STATUSES

ALL = "all"


def _student_name(complaint):
    profile = getattr(complaint, "profile", None)
    return (profile.full_name or "") if profile is not None else ""


def filter_complaints(complaints, search_term="", status=ALL, category=ALL, match_student_name=False):
    """Return the complaints matching every given predicate.

    The search term is a case-insensitive substring match on title and
    description (and the submitter's name when ``match_student_name`` is
    set). ``"all"`` or an empty value disables the status/category checks.
    """
    needle = (search_term or "").lower()
    status = status or ALL
    category = category or ALL

    def matches(c):
        if needle:
            haystacks = [c.title or "", c.description or ""]
            if match_student_name:
                haystacks.append(_student_name(c))
            if not any(needle in h.lower() for h in haystacks):
                return False
        if status != ALL and c.status != status:
            return False
        if category != ALL and c.category != category:
            return False
        return True

    return [c for c in complaints if matches(c)]


def summary_counts(complaints):
    """Counters shown on top of both dashboards, over the full fetched set."""
    counts = {"total": len(complaints)}
    for status in STATUSES:
        counts[status] = sum(1 for c in complaints if c.status == status)
    return counts
