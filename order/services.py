# order/services.py
import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import F, Prefetch
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from product_app.models import Product
from users.email import send_notification

from .exceptions import CheckoutError
from .models import Cart, CartItem, Order, OrderItem, OrderStatusHistory
from .pricing import calculate_delivery_fee

logger = logging.getLogger(__name__)


# -------------------------------------------------
# 1. INPUT NORMALISATION
# -------------------------------------------------

def normalize_product_id(value):
    """
    Accepts a raw id (int or numeric string) or a whole product object
    carrying `id` / `_id`, and returns the integer primary key.
    """
    if isinstance(value, dict):
        value = value.get('id') or value.get('_id')

    if value is None or value == '':
        raise ValidationError({'productId': ['productId is required']})

    if isinstance(value, bool):
        raise ValidationError({'productId': ['Invalid productId']})
    try:
        product_id = int(str(value).strip())
    except ValueError:
        raise ValidationError({'productId': ['Invalid productId']})

    if product_id < 1:
        raise ValidationError({'productId': ['Invalid productId']})
    return product_id


def normalize_quantity(value):
    if value is None:
        return 1
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError({'quantity': ['Quantity must be a whole number of at least 1']})
    try:
        quantity = int(value)
    except (TypeError, ValueError):
        raise ValidationError({'quantity': ['Quantity must be a whole number of at least 1']})

    if quantity < 1:
        raise ValidationError({'quantity': ['Quantity must be a whole number of at least 1']})
    return quantity


# -------------------------------------------------
# 2. CART
# -------------------------------------------------

def empty_cart_summary():
    return {
        'items': [],
        'subtotal': Decimal('0'),
        'delivery_fee': Decimal('0'),
        'total': Decimal('0'),
    }


def add_item(user, product_id, quantity=1):
    """Adds `quantity` of an active product to the user's cart."""
    product_id = normalize_product_id(product_id)
    quantity = normalize_quantity(quantity)

    product = Product.objects.filter(pk=product_id, status=Product.STATUS_ACTIVE).first()
    if product is None:
        raise NotFound('Product not found or inactive')

    cart, _ = Cart.objects.get_or_create(user=user)
    with transaction.atomic():
        item, created = CartItem.objects.select_for_update().get_or_create(
            cart=cart, product=product, defaults={'quantity': quantity}
        )
        if not created:
            CartItem.objects.filter(pk=item.pk).update(quantity=F('quantity') + quantity)

    return cart


def get_cart(user):
    """
    Cart lines with a live pricing summary. Prices are always read from the
    products, never cached on the cart.
    """
    cart = Cart.objects.filter(user=user).first()
    if cart is None:
        return empty_cart_summary()

    items = list(cart.items.select_related('product'))
    subtotal = sum((item.line_total for item in items), Decimal('0'))
    delivery_fee = calculate_delivery_fee(subtotal)
    return {
        'items': items,
        'subtotal': subtotal,
        'delivery_fee': delivery_fee,
        'total': subtotal + delivery_fee,
    }


def remove_item(user, product_id):
    product_id = normalize_product_id(product_id)

    cart = Cart.objects.filter(user=user).first()
    if cart is None:
        raise NotFound('Cart not found')

    # Removing something that isn't in the cart is not an error
    cart.items.filter(product_id=product_id).delete()
    return cart


# -------------------------------------------------
# 3. CHECKOUT
# -------------------------------------------------

@transaction.atomic
def checkout(user):
    """
    Turns the user's cart into an order.

    Product rows are locked in primary key order before validation, so two
    checkouts for the same product run one after the other and stock can't
    be sold twice. Any failure rolls back the order, the stock changes and
    the cart clear together.
    """
    cart = Cart.objects.select_for_update().filter(user=user).first()
    if cart is None:
        raise CheckoutError('Cart is empty')

    # Lines stay in cart order; only the product locks go by pk
    lines = list(cart.items.all())
    if not lines:
        raise CheckoutError('Cart is empty')

    locked = Product.objects.select_for_update().filter(pk__in=[line.product_id for line in lines]).order_by('pk')
    products = {product.pk: product for product in locked}

    subtotal = Decimal('0')
    for line in lines:
        product = products.get(line.product_id)
        if product is None:
            raise CheckoutError(f"Product {line.product_id} not available")
        if product.status != Product.STATUS_ACTIVE:
            raise CheckoutError(f"Product {product.name} not available")
        if product.stock < line.quantity:
            raise CheckoutError(f"Insufficient stock for {product.name}. Available: {product.stock}")
        subtotal += product.price * line.quantity

    delivery_fee = calculate_delivery_fee(subtotal)
    order = Order.objects.create(
        user=user,
        subtotal=subtotal,
        delivery_fee=delivery_fee,
        total=subtotal + delivery_fee,
    )
    OrderItem.objects.bulk_create([
        OrderItem(
            order=order,
            product=products[line.product_id],
            quantity=line.quantity,
            price=products[line.product_id].price,
        )
        for line in lines
    ])
    OrderStatusHistory.objects.create(order=order, status=order.status, changed_by=user)

    now = timezone.now()
    for line in lines:
        product = products[line.product_id]
        product.stock -= line.quantity
        product.total_sold += line.quantity
        product.revenue += product.price * line.quantity
        product.status = Product.STATUS_OUT_OF_STOCK if product.stock <= 0 else Product.STATUS_ACTIVE
        product.total_value = product.price * product.stock
        product.updated_at = now

    Product.objects.bulk_update(
        products.values(),
        ['stock', 'total_sold', 'revenue', 'status', 'total_value', 'updated_at'],
    )

    cart.items.all().delete()

    logger.info(f"Order {order.id} placed by {user.email}: {len(lines)} item(s), total {order.total}")
    return order


# -------------------------------------------------
# 4. ORDER QUERIES
# -------------------------------------------------

def orders_with_details():
    return Order.objects.select_related('user').prefetch_related('items__product', 'history__changed_by')


def orders_for_buyer(user):
    return orders_with_details().filter(user=user)


def orders_for_farmer(farmer):
    """
    Orders containing at least one of the farmer's products. Each order
    carries `farmer_items`, the lines for that farmer's products only.
    """
    farmer_items = OrderItem.objects.filter(product__farmer=farmer).select_related('product')
    return (
        Order.objects.filter(items__product__farmer=farmer)
        .distinct()
        .select_related('user')
        .prefetch_related(Prefetch('items', queryset=farmer_items, to_attr='farmer_items'))
    )


# -------------------------------------------------
# 5. ADMIN STATUS CHANGES
# -------------------------------------------------

def update_order_status(order, new_status, changed_by):
    old_status = order.status
    with transaction.atomic():
        order.status = new_status
        order.save(update_fields=['status', 'updated_at'])
        OrderStatusHistory.objects.create(order=order, status=new_status, changed_by=changed_by)

    logger.info(f"Order {order.id} moved from {old_status} to {new_status} by {changed_by.email}")
    notify_buyer_of_status_change(order)
    return order


def notify_buyer_of_status_change(order):
    if order.user is None:
        return False

    status_label = order.get_status_display()
    subject = f"Your Order #{order.id} is now {status_label}"
    message = (
        f"Dear {order.user.name},\n\n"
        f"Your order #{order.id} status has been updated to {status_label}.\n\n"
        f"Order total: {order.total}\n\n"
        f"Thank you for shopping with us!"
    )
    return send_notification(subject, message, [order.user.email])
