# The function returns a value and the short branch falls through, so the
# condition is inverted but the else is kept.
def order_total(items, discount):
    if not items:
        log.warning("empty order")
    else:
        subtotal = sum(item.price for item in items)
        subtotal -= discount
        record(subtotal)
        return subtotal
