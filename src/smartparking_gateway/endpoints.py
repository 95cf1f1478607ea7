"""SmartParking resource endpoints.

Pure configuration: each name maps to an HTTP verb and a path template whose
``{placeholders}`` are filled from keyword arguments at call time.
"""

from __future__ import annotations

from typing import NamedTuple


class Endpoint(NamedTuple):
    method: str
    path: str
    description: str = ""

    def render(self, **path_params: object) -> str:
        return self.path.format(**path_params)


ENDPOINTS: dict[str, Endpoint] = {
    # Parking slots
    "slots.list": Endpoint("GET", "/slots/", "All parking slots"),
    "slots.available": Endpoint("GET", "/slots/available/", "Available slots, filterable"),
    "slots.detail": Endpoint("GET", "/slots/{slot_id}/", "One slot"),
    # Admin slot management
    "admin.slots.list": Endpoint("GET", "/admin/slots/", "All slots with admin fields"),
    "admin.slots.create": Endpoint("POST", "/admin/slots/create/", "Create a slot"),
    "admin.slots.update": Endpoint("PUT", "/admin/slots/{slot_id}/update/", "Update a slot"),
    "admin.slots.delete": Endpoint("DELETE", "/admin/slots/{slot_id}/delete/", "Delete a slot"),
    "admin.slots.change_status": Endpoint(
        "POST", "/admin/slots/{slot_id}/change-status/", "Change slot status"
    ),
    "admin.test_slots": Endpoint("POST", "/admin/test-slots/", "Seed test slots"),
    # Bookings
    "bookings.create": Endpoint("POST", "/bookings/create/", "Book a slot"),
    "bookings.list": Endpoint("GET", "/user/bookings/", "Bookings of the current user"),
    "bookings.active": Endpoint("GET", "/user/bookings/active/", "Active bookings"),
    "bookings.history": Endpoint("GET", "/user/bookings/history/", "Past bookings"),
    "bookings.check_in": Endpoint("POST", "/bookings/{booking_id}/check-in/", "Check in"),
    "bookings.check_out": Endpoint("POST", "/bookings/{booking_id}/check-out/", "Check out"),
    "bookings.cancel": Endpoint("POST", "/bookings/{booking_id}/cancel/", "Cancel, with reason"),
    "bookings.payment": Endpoint("POST", "/bookings/{booking_id}/payment/", "Pay for a booking"),
    # Dashboard and profile
    "dashboard": Endpoint("GET", "/dashboard/", "Dashboard summary"),
    "profile.get": Endpoint("GET", "/user/profile/", "Current user profile"),
    "profile.update": Endpoint("PUT", "/user/profile/update/", "Update profile"),
    "parking.info": Endpoint("GET", "/parking/info/", "Parking facility information"),
}
