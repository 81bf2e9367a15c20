from datetime import timedelta

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from fleet.models import Driver, Expense, FuelLog, Maintenance, Trip, Vehicle


class TestFleetApi(APITestCase):
    """Test the HTTP surface of dispatch, completion and maintenance"""

    def setUp(self):
        super().setUp()
        self.vehicle = Vehicle.objects.create(
            name='Isuzu FRR', license_plate='KCA-001A', max_load_capacity=500, odometer=1000
        )
        self.driver = Driver.objects.create(
            name='Test Driver', license_expiry=timezone.now() + timedelta(days=365)
        )

    def dispatch(self, **overrides):
        payload = {
            'vehicleId': self.vehicle.pk,
            'driverId': self.driver.pk,
            'cargoWeight': '450',
        }
        payload.update(overrides)
        return self.client.post(reverse('trip-dispatch'), payload, format='json')

    def test_register_vehicle_and_driver(self):
        """Test registry endpoints create records with their default states"""
        response = self.client.post(reverse('vehicle-list'), {
            'name': 'Tata 1613',
            'license_plate': 'KBZ-555X',
            'max_load_capacity': 8000,
            'status': 'IN_SHOP',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'AVAILABLE')
        self.assertEqual(response.data['odometer'], 0.0)

        response = self.client.post(reverse('driver-list'), {
            'name': 'New Driver',
            'license_expiry': (timezone.now() + timedelta(days=90)).isoformat(),
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'ON_DUTY')
        self.assertEqual(response.data['safety_score'], 100.0)

        self.assertEqual(len(self.client.get(reverse('vehicle-list')).data), 2)

    def test_vehicle_requires_capacity(self):
        """Test serializer validation errors are returned as 400"""
        response = self.client.post(reverse('vehicle-list'), {'name': 'No plate'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('max_load_capacity', response.data)

    def test_dispatch(self):
        """Test a valid dispatch answers 201 with the nested vehicle"""
        response = self.dispatch()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'DISPATCHED')
        self.assertEqual(response.data['vehicle']['status'], 'ON_TRIP')

    def test_dispatch_capacity_message(self):
        """Test a capacity rejection tells the caller both numbers"""
        response = self.dispatch(cargoWeight=650)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Cargo (650kg) exceeds vehicle capacity (500kg)')
        self.assertEqual(response.data['rule'], 'capacity')

    def test_dispatch_expired_license_is_forbidden(self):
        """Test compliance rejections use 403"""
        self.driver.license_expiry = timezone.now() - timedelta(minutes=1)
        self.driver.save()
        response = self.dispatch()
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['code'], 'compliance_blocked')

    def test_dispatch_errors(self):
        """Test missing fields, unknown ids and busy vehicles"""
        response = self.client.post(reverse('trip-dispatch'), {'vehicleId': self.vehicle.pk}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 'bad_input')

        response = self.dispatch(vehicleId=9999)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

        response = self.dispatch(cargoWeight='lots')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        self.dispatch()
        response = self.dispatch()
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_complete_trip(self):
        """Test completion over HTTP, including the fuel log"""
        trip_id = self.dispatch().data['id']

        response = self.client.post(reverse('trip-complete'), {
            'tripId': trip_id,
            'vehicleId': self.vehicle.pk,
            'finalOdometer': '1120',
            'fuelLiters': '30',
            'fuelCost': '3000',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'COMPLETED')
        self.assertEqual(response.data['distance_km'], 120)
        self.assertEqual(FuelLog.objects.count(), 1)

        response = self.client.post(reverse('trip-complete'), {
            'tripId': trip_id,
            'finalOdometer': '1200',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_complete_trip_odometer_regression(self):
        """Test an odometer regression is a 400 with its own rule"""
        trip_id = self.dispatch().data['id']
        response = self.client.post(reverse('trip-complete'), {
            'tripId': trip_id,
            'finalOdometer': 10,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['rule'], 'odometer')

    def test_list_trips(self):
        """Test trips are listed newest first"""
        self.dispatch()
        response = self.client.get(reverse('trip-dispatch'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['driver']['name'], 'Test Driver')

    def test_authenticated_dispatch_records_actor(self):
        """Test the logged-in user is stored as the dispatcher"""
        from django.contrib.auth import get_user_model

        user = get_user_model().objects.create_user('dispatcher', password='pw')
        self.client.force_authenticate(user)
        response = self.dispatch()
        self.assertEqual(response.data['dispatched_by'], user.pk)

    def test_maintenance_open_and_release(self):
        """Test the maintenance endpoints drive the vehicle status"""
        response = self.client.post(reverse('maintenance'), {
            'vehicleId': self.vehicle.pk,
            'description': 'Oil change',
            'cost': '4500',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['vehicle']['status'], 'IN_SHOP')

        response = self.client.get(reverse('maintenance'))
        self.assertEqual(len(response.data), 1)

        response = self.client.patch(reverse('maintenance'), {'vehicleId': self.vehicle.pk}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'AVAILABLE')
        self.assertEqual(Maintenance.objects.get().status, Maintenance.Status.RESOLVED)

        response = self.client.patch(reverse('maintenance'), {'vehicleId': self.vehicle.pk}, format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_maintenance_missing_vehicle(self):
        """Test maintenance on an unknown vehicle is 404"""
        response = self.client.post(reverse('maintenance'), {
            'vehicleId': 31337,
            'description': 'Oil change',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_expenses(self):
        """Test expenses can be recorded and listed"""
        response = self.client.post(reverse('expense-list'), {
            'vehicle': self.vehicle.pk,
            'category': 'TOLL',
            'amount': 350,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(len(self.client.get(reverse('expense-list')).data), 1)

        response = self.client.post(reverse('expense-list'), {'amount': -1}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_trips_are_read_only_records(self):
        """Test the only way to create a trip is the dispatch gate"""
        self.assertFalse(Trip.objects.exists())
        self.dispatch(cargoWeight=9999)
        self.assertFalse(Trip.objects.exists())


class TestRegistryApi(APITestCase):
    """Test updates and removals on the registry and ledger endpoints"""

    def setUp(self):
        super().setUp()
        self.vehicle = Vehicle.objects.create(
            name='Isuzu FRR', license_plate='KCA-001A', max_load_capacity=500, odometer=1000
        )
        self.driver = Driver.objects.create(
            name='Test Driver', license_expiry=timezone.now() + timedelta(days=365)
        )

    def dispatch(self, **payload):
        data = {'vehicle_id': self.vehicle.pk, 'driver_id': self.driver.pk, 'cargo_weight': 100}
        data.update(payload)
        return self.client.post(reverse('trip-dispatch'), data, format='json')

    def test_snake_case_keys(self):
        """Test lifecycle endpoints take snake_case keys like the registry does"""
        response = self.dispatch(revenue='15000')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['revenue'], 15000)

        response = self.client.post(reverse('trip-complete'), {
            'trip_id': response.data['id'],
            'final_odometer': 1100,
            'fuel_liters': 10,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.post(reverse('trip-complete'), {'trip_id': response.data['id']}, format='json')
        self.assertEqual(response.data['error'], 'Missing required fields: final_odometer')

    def test_update_vehicle(self):
        """Test vehicle fields can be edited but status and odometer history are protected"""
        url = reverse('vehicle-detail', args=[self.vehicle.pk])

        response = self.client.patch(url, {'name': 'Isuzu NPR', 'status': 'IN_SHOP'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], 'Isuzu NPR')
        self.assertEqual(response.data['status'], 'AVAILABLE')

        response = self.client.patch(url, {'odometer': 10}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('odometer', response.data)

        response = self.client.patch(reverse('vehicle-detail', args=[999]), {'name': 'x'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_vehicle_edit_keeps_trip_status(self):
        """Test editing a vehicle on a trip leaves it on the trip"""
        self.dispatch()
        response = self.client.patch(
            reverse('vehicle-detail', args=[self.vehicle.pk]), {'max_load_capacity': 900}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.vehicle.refresh_from_db()
        self.assertEqual(self.vehicle.status, Vehicle.Status.ON_TRIP)
        self.assertEqual(self.vehicle.max_load_capacity, 900)

    def test_delete_vehicle(self):
        """Test an idle vehicle is removed and a busy one is kept"""
        self.dispatch()
        url = reverse('vehicle-detail', args=[self.vehicle.pk])
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_409_CONFLICT)

        spare = Vehicle.objects.create(name='Spare', license_plate='KDD-400F', max_load_capacity=10)
        response = self.client.delete(reverse('vehicle-detail', args=[spare.pk]))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Vehicle.objects.filter(pk=spare.pk).exists())

    def test_suspend_driver(self):
        """Test a driver suspended over HTTP cannot be dispatched"""
        url = reverse('driver-detail', args=[self.driver.pk])

        response = self.client.patch(url, {'status': 'SUSPENDED', 'safety_score': 40}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'SUSPENDED')
        self.assertEqual(response.data['safety_score'], 40)

        response = self.dispatch()
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['rule'], 'driver_suspended')

        response = self.client.patch(url, {'status': 'ON_DUTY'}, format='json')
        self.assertEqual(response.data['status'], 'ON_DUTY')
        self.assertEqual(self.dispatch().status_code, status.HTTP_201_CREATED)

    def test_driver_status_guards(self):
        """Test ON_TRIP is not settable and drivers on a trip keep their status"""
        url = reverse('driver-detail', args=[self.driver.pk])

        response = self.client.patch(url, {'status': 'ON_TRIP'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        self.dispatch()
        response = self.client.patch(url, {'status': 'OFF_DUTY', 'name': 'Renamed'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.driver.refresh_from_db()
        self.assertEqual(self.driver.status, Driver.Status.ON_TRIP)
        self.assertEqual(self.driver.name, 'Test Driver')

        self.assertEqual(self.client.delete(url).status_code, status.HTTP_409_CONFLICT)

    def test_invalid_driver_edit_changes_nothing(self):
        """Test a rejected field keeps the requested status change from applying"""
        url = reverse('driver-detail', args=[self.driver.pk])
        response = self.client.patch(url, {'status': 'SUSPENDED', 'safety_score': 250}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.driver.refresh_from_db()
        self.assertEqual(self.driver.status, Driver.Status.ON_DUTY)

    def test_delete_driver(self):
        """Test a driver without trips can be removed"""
        response = self.client.delete(reverse('driver-detail', args=[self.driver.pk]))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Driver.objects.exists())

    def test_fuel_logs(self):
        """Test fuel can be recorded by hand, edited and removed"""
        response = self.client.post(reverse('fuel-log-list'), {
            'vehicle': self.vehicle.pk,
            'liters': 40,
            'cost': 4200,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        url = reverse('fuel-log-detail', args=[response.data['id']])

        response = self.client.patch(url, {'cost': 4000}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(FuelLog.objects.get().cost, 4000)

        self.assertEqual(self.client.delete(url).status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_404_NOT_FOUND)

    def test_fuel_log_trip_must_match_vehicle(self):
        """Test a fuel log cannot point at another vehicle's trip"""
        trip_id = self.dispatch().data['id']
        other = Vehicle.objects.create(name='Other', license_plate='KDB-200D', max_load_capacity=100)

        response = self.client.post(reverse('fuel-log-list'), {
            'vehicle': other.pk,
            'trip': trip_id,
            'liters': 5,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('trip', response.data)

    def test_expense_update_and_delete(self):
        """Test expenses can be corrected and removed"""
        expense = Expense.objects.create(vehicle=self.vehicle, category=Expense.Category.TOLL, amount=300)
        url = reverse('expense-detail', args=[expense.pk])

        response = self.client.patch(url, {'amount': 350, 'category': 'PARKING'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['category'], 'PARKING')

        self.assertEqual(self.client.delete(url).status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Expense.objects.exists())

    def test_delete_maintenance(self):
        """Test only resolved tickets can be deleted over HTTP"""
        ticket_id = self.client.post(reverse('maintenance'), {
            'vehicle_id': self.vehicle.pk,
            'description': 'Brakes',
        }, format='json').data['id']
        url = reverse('maintenance-detail', args=[ticket_id])

        self.assertEqual(self.client.delete(url).status_code, status.HTTP_409_CONFLICT)
        self.client.patch(reverse('maintenance'), {'vehicle_id': self.vehicle.pk}, format='json')
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Maintenance.objects.exists())
