"""
API routers, mounted by storefront.main
"""
from . import account, appointments, cart, catalog, orders, payments, reviews, support, wishlist

all_routers = [
    catalog.router,
    account.router,
    cart.router,
    wishlist.router,
    orders.router,
    payments.router,
    appointments.router,
    support.router,
    reviews.router,
]
