from decimal import Decimal

from rest_framework import status
from rest_framework.test import APITestCase

from order import services
from order.exceptions import CheckoutError
from order.models import Cart, Order, OrderStatusHistory
from product_app.models import Product
from users.tests.factories import make_buyer, make_farmer, make_product


class CheckoutTests(APITestCase):
    url = '/api/orders/checkout'

    def setUp(self):
        self.buyer = make_buyer()
        self.farmer = make_farmer()
        self.client.force_authenticate(self.buyer)

    def add(self, product, quantity):
        resp = self.client.post('/api/cart', {'productId': product.id, 'quantity': quantity}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)

    def test_empty_cart(self):
        resp = self.client.post(self.url)
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data['detail'], 'Cart is empty')

        Cart.objects.create(user=self.buyer)
        resp = self.client.post(self.url)
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Order.objects.exists())

    def test_end_to_end(self):
        product = make_product(self.farmer, price='100', stock=5)
        self.add(product, 2)

        cart = self.client.get('/api/cart').data
        self.assertEqual(
            (cart['subtotal'], cart['deliveryFee'], cart['total']),
            (Decimal('200'), Decimal('20'), Decimal('220')),
        )

        resp = self.client.post(self.url)
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data['total'], Decimal('220'))
        self.assertEqual(resp.data['status'], Order.STATUS_PLACED)
        self.assertEqual(resp.data['items'][0]['price'], Decimal('100'))

        product.refresh_from_db()
        self.assertEqual(product.stock, 3)
        self.assertEqual(product.total_sold, 2)
        self.assertEqual(product.total_value, Decimal('300'))
        self.assertEqual(self.client.get('/api/cart').data['items'], [])
        self.assertTrue(Cart.objects.filter(user=self.buyer).exists())

    def test_insufficient_stock_changes_nothing(self):
        plenty = make_product(self.farmer, name='Onions', stock=10)
        scarce = make_product(self.farmer, name='Mangoes', stock=1)
        self.add(plenty, 3)
        self.add(scarce, 1)
        Product.objects.filter(pk=scarce.pk).update(stock=0)

        resp = self.client.post(self.url)
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data['detail'], 'Insufficient stock for Mangoes. Available: 0')

        plenty.refresh_from_db()
        self.assertEqual((plenty.stock, plenty.total_sold), (10, 0))
        self.assertFalse(Order.objects.exists())
        self.assertEqual(len(services.get_cart(self.buyer)['items']), 2)

    def test_product_deactivated_after_adding(self):
        product = make_product(self.farmer, name='Guavas')
        self.add(product, 1)
        Product.objects.filter(pk=product.pk).update(status=Product.STATUS_INACTIVE)

        resp = self.client.post(self.url)
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data['detail'], 'Product Guavas not available')

    def test_selling_out_marks_product_out_of_stock(self):
        product = make_product(self.farmer, price='600', stock=2)
        self.add(product, 2)

        resp = self.client.post(self.url)
        self.assertEqual(resp.data['deliveryFee'], Decimal('0'))

        product.refresh_from_db()
        self.assertEqual(product.stock, 0)
        self.assertEqual(product.status, Product.STATUS_OUT_OF_STOCK)
        self.assertEqual(product.revenue, Decimal('1200'))

    def test_order_snapshot_and_history(self):
        product = make_product(self.farmer, price='45', stock=10)
        self.add(product, 4)
        order = services.checkout(self.buyer)

        Product.objects.filter(pk=product.pk).update(price=Decimal('99'))
        item = order.items.get()
        self.assertEqual(item.price, Decimal('45'))
        self.assertEqual(order.subtotal, Decimal('180'))
        self.assertEqual(order.delivery_fee, Decimal('18'))
        self.assertEqual(
            list(OrderStatusHistory.objects.filter(order=order).values_list('status', flat=True)),
            [Order.STATUS_PLACED],
        )

    def test_order_items_follow_cart_order(self):
        first = make_product(self.farmer, price='10', stock=5)
        second = make_product(self.farmer, price='20', stock=5)
        self.add(second, 1)
        self.add(first, 1)

        order = services.checkout(self.buyer)
        self.assertEqual(
            [item.product_id for item in order.items.all()],
            [second.id, first.id],
        )

    def test_service_raises_checkout_error(self):
        with self.assertRaises(CheckoutError):
            services.checkout(self.buyer)

    def test_farmers_cannot_checkout(self):
        self.client.force_authenticate(self.farmer)
        self.assertEqual(self.client.post(self.url).status_code, status.HTTP_403_FORBIDDEN)
