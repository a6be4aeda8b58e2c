from django.core.exceptions import ValidationError

MIN_RATING = 1
MAX_RATING = 5


def average_rating(reviews):
    """Unrounded mean of the review ratings, 0 when there are none."""
    reviews = list(reviews)
    if not reviews:
        return 0
    return sum(r.rating for r in reviews) / len(reviews)


def rating_breakdown(reviews):
    """Number of reviews per star value, every star always present."""
    counts = {star: 0 for star in range(MIN_RATING, MAX_RATING + 1)}
    for r in reviews:
        if r.rating in counts:
            counts[r.rating] += 1
    return counts


def validate_rating(value):
    # bool is an int subclass; a checkbox value must not become a 1-star review
    if isinstance(value, bool):
        raise ValidationError({"rating": "Rating must be a whole number from 1 to 5."})
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if not isinstance(value, int) or not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError({"rating": "Rating must be a whole number from 1 to 5."})
    return value
