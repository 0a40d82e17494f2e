import requests
import os

BASE_URL = os.getenv("API_BASE_URL", "http://localhost:3000")

def check_service_apis():
    print("\n=== Checking Service APIs ===")

    service_data = {
        "service_name": "Garden Tidy-up",
        "category": "Gardening",
        "price": "$35",
        "description": "Two hours of weeding, pruning and lawn edging.",
        "image": "https://images.example.com/garden.jpg",
        "provider_name": "Green Thumb",
        "email": "green@example.com",
        "provider_contact": "5555555555"
    }
    response = requests.post(f"{BASE_URL}/services", json=service_data)
    print("Create Service:", response.status_code)
    service_id = response.json()["serviceId"]

    response = requests.post(f"{BASE_URL}/services", json={"service_name": "Incomplete"})
    print("Create Service (missing fields):", response.status_code)

    response = requests.get(f"{BASE_URL}/services/{service_id}")
    print("Get Service by ID:", response.status_code)

    response = requests.get(f"{BASE_URL}/services/not-an-id")
    print("Get Service (malformed id):", response.status_code)

    response = requests.get(f"{BASE_URL}/services/top")
    print("Get Top Services:", response.status_code, len(response.json()))

    response = requests.get(f"{BASE_URL}/my-services/{service_data['email']}")
    print("Get Provider Services:", response.status_code)

    response = requests.put(f"{BASE_URL}/services/{service_id}", json={"price": 40})
    print("Update Service:", response.status_code, response.json())

    response = requests.patch(f"{BASE_URL}/services/{service_id}/rating", json={"rating": 4.5})
    print("Set Service Rating:", response.status_code)

    response = requests.get(f"{BASE_URL}/services")
    print("Get All Services:", response.status_code)

    return service_id

def check_booking_apis(service_id):
    print("\n=== Checking Booking APIs ===")

    booking_data = {
        "serviceId": service_id,
        "userEmail": "customer@example.com",
        "date": "2024-07-01",
        "notes": "Back gate is unlocked"
    }
    response = requests.post(f"{BASE_URL}/bookings", json=booking_data)
    print("Create Booking:", response.status_code)
    booking_id = response.json()["insertedId"]

    response = requests.patch(f"{BASE_URL}/bookings/{booking_id}/rate", json={})
    print("Rate Booking (no rating):", response.status_code)

    response = requests.patch(f"{BASE_URL}/bookings/{booking_id}/rate", json={"rating": 5})
    print("Rate Booking:", response.status_code)

    response = requests.post(f"{BASE_URL}/services/{service_id}/rating/recompute")
    print("Recompute Service Rating:", response.status_code, response.json())

    response = requests.get(f"{BASE_URL}/bookings", params={"email": booking_data["userEmail"]})
    print("Get User Bookings:", response.status_code, len(response.json()))

    response = requests.delete(f"{BASE_URL}/bookings/{booking_id}")
    print("Delete Booking:", response.status_code, response.json())

def main():
    try:
        service_id = check_service_apis()
        check_booking_apis(service_id)

        response = requests.delete(f"{BASE_URL}/services/{service_id}")
        print("\nDelete Service:", response.status_code, response.json())
        print("\nAll API checks completed!")

    except requests.exceptions.ConnectionError:
        print(f"Error: Could not connect to the server. Make sure the server is running on {BASE_URL}")

if __name__ == "__main__":
    main()
