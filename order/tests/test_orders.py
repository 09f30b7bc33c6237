import csv
import io

from django.core import mail
from rest_framework import status
from rest_framework.test import APITestCase

from order import services
from order.models import Order, OrderStatusHistory
from users.tests.factories import make_admin, make_buyer, make_farmer, make_product


def place_order(buyer, *lines):
    for product, quantity in lines:
        services.add_item(buyer, product.id, quantity)
    return services.checkout(buyer)


class OrderQueryTests(APITestCase):
    def setUp(self):
        self.buyer = make_buyer(name='Priya')
        self.other_buyer = make_buyer()
        self.admin = make_admin()
        self.farmer_a = make_farmer()
        self.farmer_b = make_farmer()
        self.carrots = make_product(self.farmer_a, name='Carrots', stock=50)
        self.beans = make_product(self.farmer_b, name='Beans', stock=50)

    def test_my_orders_newest_first(self):
        first = place_order(self.buyer, (self.carrots, 1))
        second = place_order(self.buyer, (self.beans, 1))
        place_order(self.other_buyer, (self.beans, 1))

        self.client.force_authenticate(self.buyer)
        resp = self.client.get('/api/orders')
        self.assertEqual([o['id'] for o in resp.data], [second.id, first.id])
        self.assertEqual(resp.data[0]['items'][0]['product']['name'], 'Beans')

    def test_farmer_sees_orders_with_their_products_only(self):
        mixed = place_order(self.buyer, (self.carrots, 2), (self.beans, 1))
        only_b = place_order(self.other_buyer, (self.beans, 3))

        self.client.force_authenticate(self.farmer_a)
        resp = self.client.get('/api/orders/farmer')
        self.assertEqual([o['id'] for o in resp.data], [mixed.id])
        self.assertEqual([i['product']['name'] for i in resp.data[0]['items']], ['Carrots'])
        self.assertEqual(resp.data[0]['buyerName'], 'Priya')

        self.client.force_authenticate(self.farmer_b)
        resp = self.client.get('/api/orders/farmer')
        self.assertEqual({o['id'] for o in resp.data}, {mixed.id, only_b.id})

    def test_order_detail_access(self):
        order = place_order(self.buyer, (self.carrots, 1))
        url = f'/api/orders/{order.id}'

        self.client.force_authenticate(self.other_buyer)
        resp = self.client.get(url)
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(resp.data['detail'], 'Not authorized to view this order')

        self.client.force_authenticate(self.buyer)
        resp = self.client.get(url)
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data['user']['id'], self.buyer.id)
        self.assertNotIn('password', resp.data['user'])

        self.client.force_authenticate(self.admin)
        self.assertEqual(self.client.get(url).status_code, status.HTTP_200_OK)
        self.assertEqual(self.client.get('/api/orders/999999').status_code, status.HTTP_404_NOT_FOUND)

    def test_deleted_product_keeps_price_snapshot(self):
        order = place_order(self.buyer, (self.carrots, 2))
        self.carrots.delete()

        self.client.force_authenticate(self.buyer)
        item = self.client.get(f'/api/orders/{order.id}').data['items'][0]
        self.assertIsNone(item['product'])
        self.assertEqual(item['quantity'], 2)


class AdminOrderTests(APITestCase):
    def setUp(self):
        self.admin = make_admin()
        self.buyer = make_buyer(name='Arjun')
        self.other_buyer = make_buyer()
        farmer = make_farmer()
        self.product = make_product(farmer, price='100', stock=100)
        self.order = place_order(self.buyer, (self.product, 1))
        self.other_order = place_order(self.other_buyer, (self.product, 2))
        self.client.force_authenticate(self.admin)

    def ids(self, resp):
        return [o['id'] for o in resp.data['data']['orders']]

    def test_list_and_filters(self):
        resp = self.client.get('/api/admin/orders')
        self.assertEqual(resp.data['results'], 2)
        self.assertEqual(self.ids(resp), [self.other_order.id, self.order.id])

        resp = self.client.get('/api/admin/orders', {'user': self.buyer.id})
        self.assertEqual(self.ids(resp), [self.order.id])

        # Unknown status values are ignored
        resp = self.client.get('/api/admin/orders', {'status': 'lost'})
        self.assertEqual(resp.data['results'], 2)

        Order.objects.filter(pk=self.order.pk).update(status=Order.STATUS_IN_TRANSIT)
        resp = self.client.get('/api/admin/orders', {'status': 'shipped'})
        self.assertEqual(self.ids(resp), [self.order.id])

    def test_date_range_is_inclusive(self):
        today = self.order.created_at.date().isoformat()
        resp = self.client.get('/api/admin/orders', {'from': today, 'to': today})
        self.assertEqual(resp.data['results'], 2)

        resp = self.client.get('/api/admin/orders', {'from': '2000-01-01', 'to': '2000-01-31'})
        self.assertEqual(resp.data['results'], 0)

    def test_update_status(self):
        url = f'/api/admin/orders/{self.order.id}/status'

        resp = self.client.patch(url, {'status': 'placed'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        resp = self.client.patch('/api/admin/orders/999999/status', {'status': 'processing'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

        resp = self.client.patch(url, {'status': 'processing'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data['data']['order']['status'], 'processing')
        self.assertEqual(
            list(OrderStatusHistory.objects.filter(order=self.order).values_list('status', flat=True)),
            ['placed', 'processing'],
        )
        self.assertEqual(mail.outbox[-1].to, [self.buyer.email])

    def test_update_status_survives_email_failure(self):
        from unittest import mock

        with mock.patch('users.email.send_mail', side_effect=ConnectionRefusedError):
            resp = self.client.patch(f'/api/admin/orders/{self.order.id}/status', {'status': 'cancelled'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.STATUS_CANCELLED)

    def test_export_csv(self):
        resp = self.client.get('/api/admin/orders/export')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp['Content-Type'], 'text/csv')
        self.assertIn('filename="orders.csv"', resp['Content-Disposition'])

        rows = list(csv.reader(io.StringIO(resp.content.decode())))
        self.assertEqual(rows[0], ['OrderID', 'Customer', 'Total', 'Status', 'Created At'])
        self.assertEqual(len(rows), 3)
        by_id = {row[0]: row for row in rows[1:]}
        self.assertEqual(by_id[str(self.order.id)][1], 'Arjun')
        self.assertEqual(by_id[str(self.order.id)][3], 'placed')

    def test_non_admin_forbidden(self):
        self.client.force_authenticate(self.buyer)
        self.assertEqual(self.client.get('/api/admin/orders').status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(self.client.get('/api/admin/orders/export').status_code, status.HTTP_403_FORBIDDEN)
