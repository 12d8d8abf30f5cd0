SUCCESS_LINE = (
    '127.0.0.1 - - [04/Nov/2017:13:05:35 -0500] "GET /js/embed.min.js HTTP/2.0" 200 20480 '
    '"https://nbsoftsolutions.com/blog/monitoring-windows-system-metrics-with-grafana" '
    '"Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) '
    'Chrome/61.0.3163.100 Safari/537.36" "comments.nbsoftsolutions.com"'
)

SKIP_LINE = SUCCESS_LINE.replace("127.0.0.1", "127.0.0.2", 1)

FAIL_LINE = "Cats are alright"


def nginx_line(
    remote_addr="203.0.113.9",
    time_local="14/Nov/2017:13:00:05 +0000",
    method="GET",
    path="/",
    status="200",
    body_bytes_sent="512",
    referer="-",
    user_agent="curl/8.4.0",
    host="nbsoftsolutions.com",
):
    return (
        f'{remote_addr} - - [{time_local}] "{method} {path} HTTP/1.1" {status} {body_bytes_sent} '
        f'"{referer}" "{user_agent}" "{host}"'
    )
