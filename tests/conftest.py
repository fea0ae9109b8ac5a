import pytest

CHROME_HEADER = "name,url,username,password,note,date_created,date_last_used,date_password_changed"


@pytest.fixture
def chrome_csv():
    """A small Chrome export with variant urls for the same sites."""
    return "\n".join([
        CHROME_HEADER,
        "bank.com,https://bank.com/x,alice,s3cret,,13300000000000000,13310000000000000,13300000000000000",
        "example.com,https://Example.com/login,bob,hunter2,,1,2,3",
        "bank.com,https://bank.com/x,alice2,other,,4,5,6",
        "example.com,http://www.example.com/,bob,hunter2,,7,8,9",
        "Bank,https://WWW.Bank.com,carol,pw,,10,11,12",
        ",,nourl,pw,,,,",
    ]) + "\n"
