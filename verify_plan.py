
import requests

BASE_URL = "http://localhost:8000/api"

def run_test():
    resp = requests.post(f"{BASE_URL}/session", json={})
    session_id = resp.json()["session_id"]
    trip = {
        "source": "London", "destination": "Lisbon",
        "start_date": "2026-05-01", "end_date": "2026-05-05",
        "budget": "2000 EUR", "travelers": 2,
        "interests": ["Food", "History"]
    }
    resp = requests.post(f"{BASE_URL}/plan/{session_id}", json=trip)

    if resp.status_code != 200:
        print("Error:", resp.text)
        return

    data = resp.json()
    print(f"\nPlan status: {data['state']['status']}")
    if data["state"]["error"]:
        print(f"Error: {data['state']['error']}")
        return

    for section in data["sections"]:
        print(f"\n## {section['title']}\n{section['content']}")

    chat_payload = {"session_id": session_id, "message": "What should we eat on the first night?"}
    resp = requests.post(f"{BASE_URL}/chat", json=chat_payload)
    print("\nAssistant:", resp.json().get("reply"))

if __name__ == "__main__":
    run_test()
