import datetime

from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from product_app.models import Equipment
from users.tests.factories import make_buyer, make_farmer


def equipment_payload(**overrides):
    today = timezone.localdate()
    payload = {
        'equipmentName': 'Mahindra 575',
        'equipmentType': 'Tractor',
        'brand': 'Mahindra',
        'modelNumber': '575 DI',
        'condition': 'Good',
        'fuelType': 'Diesel',
        'rentalPrice': '1500.00',
        'minRentalDuration': 1,
        'maxRentalDuration': 7,
        'availabilityStartDate': today.isoformat(),
        'availabilityEndDate': (today + datetime.timedelta(days=30)).isoformat(),
        'pickupMethod': 'Self-pickup',
        'images': ['https://img.example.com/tractor.jpg'],
    }
    payload.update(overrides)
    return payload


class EquipmentTests(APITestCase):
    url = '/api/equipment'

    def setUp(self):
        self.farmer = make_farmer()
        self.client.force_authenticate(self.farmer)

    def test_create_and_list_own(self):
        resp = self.client.post(self.url, equipment_payload(), format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data['owner'], self.farmer.id)

        resp = self.client.get(self.url)
        self.assertEqual(len(resp.data), 1)
        self.assertEqual(resp.data[0]['equipmentName'], 'Mahindra 575')

    def test_end_before_start_rejected(self):
        today = timezone.localdate()
        resp = self.client.post(self.url, equipment_payload(
            availabilityStartDate=today.isoformat(),
            availabilityEndDate=(today - datetime.timedelta(days=1)).isoformat(),
        ), format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('availabilityEndDate', resp.data)

    def test_image_count_and_enums(self):
        resp = self.client.post(self.url, equipment_payload(images=[], fuelType='Electric'), format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('images', resp.data)
        self.assertIn('fuelType', resp.data)

    def test_other_farmers_equipment_is_404(self):
        self.client.post(self.url, equipment_payload(), format='json')
        equipment = Equipment.objects.get()

        self.client.force_authenticate(make_farmer())
        self.assertEqual(self.client.get(f'{self.url}/{equipment.id}').status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(self.client.delete(f'{self.url}/{equipment.id}').status_code, status.HTTP_404_NOT_FOUND)

    def test_partial_update_checks_window_against_stored_dates(self):
        self.client.post(self.url, equipment_payload(), format='json')
        equipment = Equipment.objects.get()
        before_start = (equipment.availability_start_date - datetime.timedelta(days=2)).isoformat()
        resp = self.client.patch(f'{self.url}/{equipment.id}', {'availabilityEndDate': before_start}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_buyer_cannot_manage_equipment(self):
        self.client.force_authenticate(make_buyer())
        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_403_FORBIDDEN)

    def test_available_is_public(self):
        self.client.post(self.url, equipment_payload(), format='json')
        expired = self.client.post(self.url, equipment_payload(
            availabilityStartDate='2020-01-01', availabilityEndDate='2020-02-01',
        ), format='json')
        self.assertEqual(expired.status_code, status.HTTP_201_CREATED)

        self.client.force_authenticate(None)
        resp = self.client.get(f'{self.url}/available')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(len(resp.data), 1)
