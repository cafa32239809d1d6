"""
Report and receipt API tests
"""
from datetime import date
from decimal import Decimal
from fastapi.testclient import TestClient


class TestReports:

    def test_dashboard(self, client: TestClient, auth_headers, active_booking, sample_room_102):
        response = client.get("/reports/dashboard", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total_rooms"] == 2
        assert data["occupied_rooms"] == 1
        assert data["active_bookings"] == 1
        assert data["recent_bookings"][0]["id"] == active_booking.id

    def test_booking_report_defaults_to_last_thirty_days(self, client: TestClient, auth_headers,
                                                         active_booking):
        response = client.get("/reports/bookings", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["end_date"] == date.today().isoformat()
        assert len(data["occupancy"]) == 31
        assert data["stats"]["total_bookings"] == 1
        assert Decimal(data["stats"]["average_booking_value"]) == Decimal("60000")

    def test_booking_report_range(self, client: TestClient, auth_headers):
        response = client.get("/reports/bookings", headers=auth_headers, params={
            "start_date": "2024-01-01", "end_date": "2024-01-07",
        })

        data = response.json()
        assert data["stats"]["total_bookings"] == 0
        assert [row["date"] for row in data["occupancy"]][0] == "2024-01-01"
        assert len(data["occupancy"]) == 7

    def test_bad_date(self, client: TestClient, auth_headers):
        response = client.get("/reports/bookings", headers=auth_headers,
                              params={"start_date": "yesterday"})
        assert response.status_code == 422

    def test_occupancy_csv(self, client: TestClient, auth_headers, sample_room):
        response = client.get("/reports/occupancy.csv", headers=auth_headers, params={
            "start_date": "2024-01-01", "end_date": "2024-01-02",
        })

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "occupancy-report-2024-01-01-to-2024-01-02.csv" in response.headers["content-disposition"]
        lines = response.text.strip().splitlines()
        assert lines == [
            "Date,Occupied Rooms,Total Rooms,Occupancy Rate",
            "2024-01-01,0,1,0.00%",
            "2024-01-02,0,1,0.00%",
        ]

    def test_reports_need_a_session(self, client: TestClient):
        assert client.get("/reports/dashboard").status_code == 401


class TestReceipts:

    def test_booking_receipt(self, client: TestClient, auth_headers, active_booking):
        response = client.get(f"/receipts/bookings/{active_booking.id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "Booking Receipt" in response.text
        assert "₦60,000.00" in response.text
        assert "VAT" not in response.text

    def test_bar_receipt_layouts(self, client: TestClient, auth_headers, sample_drink):
        order_id = client.post("/bar-orders", headers=auth_headers, json={
            "guest_name": "Chidi", "drink_id": sample_drink.id, "quantity": 3,
        }).json()["id"]

        full = client.get(f"/receipts/bar-orders/{order_id}", headers=auth_headers)
        compact = client.get(f"/receipts/bar-orders/{order_id}", headers=auth_headers,
                             params={"layout": "compact"})

        for response in (full, compact):
            assert response.status_code == 200
            assert "₦337.50" in response.text
            assert "₦4,837.50" in response.text
        assert "3 x ₦1,500.00" in compact.text

    def test_unknown_layout(self, client: TestClient, auth_headers, active_booking):
        response = client.get(f"/receipts/bookings/{active_booking.id}", headers=auth_headers,
                              params={"layout": "poster"})
        assert response.status_code == 400

    def test_kitchen_ticket(self, client: TestClient, auth_headers):
        order_id = client.post("/kitchen-orders", headers=auth_headers, json={
            "guest_name": "Tunde", "food_name": "Suya", "price": "2000", "quantity": 2,
        }).json()["id"]

        response = client.get(f"/receipts/kitchen-orders/{order_id}/ticket", headers=auth_headers)

        assert response.status_code == 200
        assert f"Kitchen Order #{order_id}" in response.text
        assert "2 x Suya" in response.text
        assert "₦" not in response.text

    def test_missing_booking(self, client: TestClient, auth_headers):
        response = client.get("/receipts/bookings/999", headers=auth_headers)
        assert response.status_code == 404
