"""ASN HRMS backend: HR, attendance, leave and Indian payroll compliance."""
