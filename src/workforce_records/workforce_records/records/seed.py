"""Default dataset written to an empty store on first read."""

from __future__ import annotations

from datetime import datetime

from werkzeug.security import generate_password_hash

from ..payroll.calculator.standard_calculator import compute_salary


def default_users() -> list[dict]:
    return [
        {
            "id": "1",
            "loginId": "OIADMI20240001",
            "fullName": "System Admin",
            "email": "admin@odoo.com",
            "phone": "9876543210",
            "role": "ADMIN",
            "joiningYear": 2024,
            "isFirstLogin": False,
            "password": generate_password_hash("AdminPassword123!"),
            "status": "ACTIVE",
            "attendanceStatus": "PRESENT",
            "department": "Management",
            "location": "Mumbai, India",
            "skills": ["Leadership", "System Architecture", "Security", "Project Management"],
            "certifications": ["PMP", "CISSP", "ITIL v4"],
            "hobbies": ["Chess", "Photography", "Hiking"],
            "salary": compute_salary(150000).to_dict(),
            "dob": "1985-05-15",
            "gender": "Male",
            "nationality": "Indian",
            "bankDetails": {
                "accountNumber": "987654321012",
                "bankName": "HDFC Bank",
                "ifsc": "HDFC0001234",
                "pan": "ABCDE1234F",
                "uan": "100987654321",
            },
        },
        {
            "id": "2",
            "loginId": "OIJODO20240002",
            "fullName": "John Doe",
            "email": "john.doe@odoo.com",
            "phone": "9998887776",
            "role": "EMPLOYEE",
            "joiningYear": 2024,
            "isFirstLogin": False,
            "password": generate_password_hash("TempPass123!"),
            "status": "ACTIVE",
            "attendanceStatus": "ABSENT",
            "department": "Engineering",
            "manager": "System Admin",
            "location": "Bangalore, India",
            "skills": ["React", "Node.js", "PostgreSQL", "TypeScript"],
            "certifications": ["AWS Cloud Practitioner", "Oracle Java Professional"],
            "hobbies": ["Coding", "Gaming", "Reading"],
            "salary": compute_salary(85000).to_dict(),
            "dob": "1995-12-10",
            "gender": "Male",
            "nationality": "Indian",
            "bankDetails": {
                "accountNumber": "112233445566",
                "bankName": "ICICI Bank",
                "ifsc": "ICIC0005678",
                "pan": "FGHIJ5678K",
                "uan": "100112233445",
            },
        },
        {
            "id": "3",
            "loginId": "OISMWA20240003",
            "fullName": "Smith Walker",
            "email": "smith.walker@odoo.com",
            "phone": "9123456780",
            "role": "EMPLOYEE",
            "joiningYear": 2024,
            "isFirstLogin": False,
            "password": generate_password_hash("Password123!"),
            "status": "ACTIVE",
            "attendanceStatus": "PRESENT",
            "department": "Sales",
            "manager": "System Admin",
            "location": "Delhi, India",
            "skills": ["Communication", "B2B Sales", "Negotiation"],
            "certifications": ["Certified Sales Professional"],
            "hobbies": ["Cricket", "Travel"],
            "salary": compute_salary(65000).to_dict(),
            "dob": "1992-08-20",
            "gender": "Male",
            "nationality": "Indian",
            "bankDetails": {
                "accountNumber": "998877665544",
                "bankName": "SBI Bank",
                "ifsc": "SBIN0001122",
                "pan": "KLMNO9012L",
                "uan": "100998877665",
            },
        },
    ]


def default_time_off(now: datetime) -> list[dict]:
    submitted_at = now.isoformat()
    return [
        {
            "id": "to-1",
            "userId": "2",
            "employeeName": "John Doe",
            "type": "PAID",
            "startDate": "2024-06-10",
            "endDate": "2024-06-12",
            "status": "APPROVED",
            "reason": "Family vacation",
            "submittedAt": submitted_at,
        },
        {
            "id": "to-2",
            "userId": "3",
            "employeeName": "Smith Walker",
            "type": "SICK",
            "startDate": "2024-06-15",
            "endDate": "2024-06-15",
            "status": "PENDING",
            "reason": "Fever and cold",
            "attachment": "medical_cert.pdf",
            "submittedAt": submitted_at,
        },
    ]
