from apps.workflow.models import CompanyDefaults


def get_company_defaults():
    """Retrieve the single CompanyDefaults instance using the singleton pattern."""
    return CompanyDefaults.get_instance()


def get_job_email_address(job_number: str) -> str:
    """Internal inbox that collects everything about one job."""
    domain = get_company_defaults().job_email_domain
    return f"job-{job_number}@{domain}".lower()


def get_rfq_email_address(rfq_id) -> str:
    """Reply-to address for vendor responses to an RFQ."""
    domain = get_company_defaults().job_email_domain
    return f"rfq-{rfq_id}@{domain}".lower()
