"""
Tests for the FTP server endpoints
"""


def server_payload(**fields):
    payload = {
        "name": "Circle Home",
        "server_type": "circleftp",
        "isp_provider": "Circle Network",
        "priority": 1,
    }
    payload.update(fields)
    return payload


class TestFtpServersApi:

    def test_requires_auth(self, client):
        assert client.get("/api/ftp-servers").status_code == 401
        assert client.get("/api/ftp-servers/types").status_code == 401

    def test_server_types(self, client, auth_headers):
        response = client.get("/api/ftp-servers/types", headers=auth_headers)

        assert response.status_code == 200
        types = {t["server_type"]: t for t in response.json()["server_types"]}
        assert set(types) == {"circleftp", "dflix", "amaderftp"}
        assert types["amaderftp"]["requires_auth"] is True
        assert types["amaderftp"]["pagination_style"] == "offset"
        assert "trending" in types["circleftp"]["capabilities"]

    def test_create_and_get(self, client, auth_headers):
        response = client.post("/api/ftp-servers", json=server_payload(), headers=auth_headers)

        assert response.status_code == 201
        server = response.json()["server"]
        assert server["server_type"] == "circleftp"
        assert server["config"]["endpoints"]["details"] == "/api/posts/{id}"

        response = client.get(f"/api/ftp-servers/{server['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["server"]["name"] == "Circle Home"

    def test_create_unknown_type(self, client, auth_headers):
        response = client.post(
            "/api/ftp-servers",
            json=server_payload(server_type="plex"),
            headers=auth_headers
        )
        assert response.status_code == 400

    def test_create_duplicate(self, client, auth_headers):
        client.post("/api/ftp-servers", json=server_payload(), headers=auth_headers)
        response = client.post("/api/ftp-servers", json=server_payload(), headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "An FTP server with this name and server type already exists"

    def test_invalid_urls_rejected(self, client, auth_headers):
        response = client.post(
            "/api/ftp-servers",
            json=server_payload(ping_url="not a url"),
            headers=auth_headers
        )
        assert response.status_code == 400
        assert "Ping URL must be a valid http or https URL" in response.json()["message"]

        server_id = client.post(
            "/api/ftp-servers", json=server_payload(), headers=auth_headers
        ).json()["server"]["id"]
        response = client.put(
            f"/api/ftp-servers/{server_id}",
            json={"ui_url": "http://[::1"},
            headers=auth_headers
        )
        assert response.status_code == 400

    def test_list_and_filter(self, client, auth_headers):
        client.post("/api/ftp-servers", json=server_payload(name="a", priority=1), headers=auth_headers)
        client.post("/api/ftp-servers", json=server_payload(name="b", priority=9), headers=auth_headers)
        client.post(
            "/api/ftp-servers",
            json=server_payload(name="c", server_type="dflix", is_active=False),
            headers=auth_headers
        )

        servers = client.get("/api/ftp-servers", headers=auth_headers).json()["servers"]
        assert [s["name"] for s in servers] == ["b", "c", "a"]

        servers = client.get("/api/ftp-servers?is_active=false", headers=auth_headers).json()["servers"]
        assert [s["name"] for s in servers] == ["c"]

        servers = client.get("/api/ftp-servers?server_type=dflix", headers=auth_headers).json()["servers"]
        assert [s["name"] for s in servers] == ["c"]

    def test_all_public(self, client, auth_headers, other_auth_headers):
        client.post("/api/ftp-servers", json=server_payload(name="mine"), headers=auth_headers)
        client.post("/api/ftp-servers", json=server_payload(name="theirs"), headers=other_auth_headers)

        response = client.get("/api/ftp-servers/all-public", headers=auth_headers)

        assert response.status_code == 200
        assert {s["name"] for s in response.json()["servers"]} == {"mine", "theirs"}

    def test_other_users_server_is_hidden(self, client, auth_headers, other_auth_headers):
        server_id = client.post(
            "/api/ftp-servers", json=server_payload(), headers=auth_headers
        ).json()["server"]["id"]

        assert client.get(f"/api/ftp-servers/{server_id}", headers=other_auth_headers).status_code == 404
        assert client.delete(f"/api/ftp-servers/{server_id}", headers=other_auth_headers).status_code == 404

    def test_update_ignores_server_type(self, client, auth_headers):
        server_id = client.post(
            "/api/ftp-servers", json=server_payload(), headers=auth_headers
        ).json()["server"]["id"]

        response = client.put(
            f"/api/ftp-servers/{server_id}",
            json={"priority": 4, "server_type": "dflix"},
            headers=auth_headers
        )

        assert response.status_code == 200
        server = response.json()["server"]
        assert server["priority"] == 4
        assert server["server_type"] == "circleftp"

    def test_delete(self, client, auth_headers):
        server_id = client.post(
            "/api/ftp-servers", json=server_payload(), headers=auth_headers
        ).json()["server"]["id"]

        response = client.delete(f"/api/ftp-servers/{server_id}", headers=auth_headers)
        assert response.status_code == 200
        assert client.get(f"/api/ftp-servers/{server_id}", headers=auth_headers).status_code == 404

    def test_image_url(self, client, auth_headers):
        server_id = client.post(
            "/api/ftp-servers",
            json=server_payload(server_type="amaderftp"),
            headers=auth_headers
        ).json()["server"]["id"]

        response = client.get(
            f"/api/ftp-servers/{server_id}/image-url",
            params={"image_path": "abc", "image_kind": "backdrop", "content_id": "item1"},
            headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["url"] == "http://amaderftp.net:8096/Items/item1/Images/Backdrop?tag=abc&quality=96"
