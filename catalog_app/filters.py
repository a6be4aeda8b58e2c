"""
Catalog views over a product snapshot.

Every function here is pure: it takes whatever the repository listed and
returns a new list, keeping the input order.
"""
ALL_CATEGORIES = "All"


def by_category(products, category):
    if category == ALL_CATEGORIES:
        return list(products)
    return [p for p in products if p.category == category]


def sale_only(products):
    return [p for p in products if p.is_special]


def featured_only(products):
    return [p for p in products if p.is_featured]


def search(products, query):
    """Case-insensitive match on name, description and category."""
    q = (query or "").strip().lower()
    if not q:
        return list(products)
    return [
        p for p in products
        if q in p.name.lower()
        or q in (p.description or "").lower()
        or q in p.category.lower()
    ]


def distinct_categories(products):
    """"All" first, then each category in the order it first shows up."""
    categories = [ALL_CATEGORIES]
    for p in products:
        if p.category not in categories:
            categories.append(p.category)
    return categories


def apply_filters(products, category=None, sale=False, query=None, featured=False):
    result = list(products)
    if sale:
        result = sale_only(result)
    if category:
        result = by_category(result, category)
    if featured:
        result = featured_only(result)
    if query:
        result = search(result, query)
    return result
