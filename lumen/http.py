# lumen/http.py
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from . import __version__

# Browser-like UA; USCCB serves odd variants to unknown clients.
UA_HEADERS = {
    "User-Agent": ("Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
                   "(KHTML, like Gecko) Chrome/124 Safari/537.36 "
                   f"lumen-impulse/{__version__}"),
    "Accept-Language": "en-US,en;q=0.8",
    "Accept": "text/markdown,text/html,application/json;q=0.9,*/*;q=0.8",
}


def make_session() -> requests.Session:
    """One attempt per call: no connect/read/status retries."""
    retry = Retry(total=0, allowed_methods=("GET",), raise_on_status=False)
    session = requests.Session()
    session.headers.update(UA_HEADERS)
    session.mount("https://", HTTPAdapter(max_retries=retry))
    session.mount("http://", HTTPAdapter(max_retries=retry))
    return session
