#!/usr/bin/env python3
"""
실행 중인 서버 대상 API 동작 확인 스크립트 (pytest 수집 대상 아님)
"""
import json
import subprocess
import sys
import time

import requests

from app.core.config import settings


def run_smoke_check(base_url: str = None):
    """서버를 띄우고 주문 생성 -> 조회 -> 상태 변경 -> 삭제 흐름 확인"""

    print("🚀 Starting FastAPI server...")

    server_process = subprocess.Popen([
        sys.executable, "run_server.py"
    ], stdout=subprocess.PIPE, stderr=subprocess.PIPE)

    # 서버가 시작될 때까지 대기
    time.sleep(5)

    base_url = base_url or f"http://localhost:{settings.PORT}"
    orders_url = f"{base_url}{settings.API_PREFIX}/orders"

    try:
        # 1. 헬스 체크
        print("\n📊 Testing health endpoint...")
        response = requests.get(f"{orders_url}/health")
        print(f"Status: {response.status_code}")
        print(f"Response: {response.json()}")

        # 2. 주문 생성
        print("\n🆕 Creating order...")
        response = requests.post(orders_url, json={
            "customerName": "John Doe",
            "customerEmail": "john@example.com",
            "productName": "Widget",
            "quantity": 2,
            "unitPrice": 10.00,
            "shippingAddress": "123 Main St City",
        })
        print(f"Status: {response.status_code}")
        created = response.json()
        print(f"Response: {json.dumps(created, indent=2, ensure_ascii=False)}")
        order_id = created["id"]

        # 3. 상태 변경
        print("\n🚚 Updating order status...")
        response = requests.patch(f"{orders_url}/{order_id}/status", json="SHIPPED")
        print(f"Status: {response.status_code}")
        print(f"Response: {response.json()}")

        # 4. 잘못된 상태값
        print("\n❓ Sending invalid status...")
        response = requests.patch(f"{orders_url}/{order_id}/status", json="NOT_A_STATUS")
        print(f"Status: {response.status_code}")
        print(f"Response: {response.json()}")

        # 5. 페이징 조회
        print("\n📦 Listing orders...")
        response = requests.get(orders_url, params={"page": 0, "size": 5})
        print(f"Status: {response.status_code}")
        print(f"Response: {json.dumps(response.json(), indent=2, ensure_ascii=False)}")

        # 6. 삭제 후 조회
        print("\n🗑️  Deleting order...")
        response = requests.delete(f"{orders_url}/{order_id}")
        print(f"Status: {response.status_code}")
        response = requests.get(f"{orders_url}/{order_id}")
        print(f"Status after delete: {response.status_code}")

        print("\n✅ Smoke check completed successfully!")

    except requests.exceptions.ConnectionError:
        print("❌ Failed to connect to server")
    except Exception as e:
        print(f"❌ Smoke check failed: {e}")
    finally:
        # 서버 종료
        print("\n🛑 Stopping server...")
        server_process.terminate()
        server_process.wait()


if __name__ == "__main__":
    run_smoke_check()
