"""
Endpoints de despesas: CRUD, workflow de status, pendientes por rol y comprovante.
"""
import pytest
from fastapi.testclient import TestClient


def _crear_despesa(client: TestClient, **campos) -> int:
    response = client.post("/expenses", json=campos)
    assert response.status_code == 201
    return response.json()["insertedId"]


class TestCrudDespesas:

    def test_crear_y_obtener(self, client, funcionario):
        despesa_id = _crear_despesa(
            client,
            userId=funcionario.id,
            amount_requested=100,
            description="Almoço com cliente",
            status="aprovado",
            valor_aprovado=100,
        )

        response = client.get(f"/expenses/{despesa_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == despesa_id
        assert data["userId"] == funcionario.id
        assert data["status"] == "pendente"
        assert data["valor_aprovado"] is None
        assert data["amount_requested"] == 100
        assert data["description"] == "Almoço com cliente"
        assert data["receipt"] is None
        assert data["createdAt"]

    def test_body_que_no_es_objeto(self, client):
        assert client.post("/expenses", json=[1, 2]).status_code == 400

    def test_listar_mas_recientes_primero(self, client):
        primera = _crear_despesa(client, description="primera")
        segunda = _crear_despesa(client, description="segunda")

        response = client.get("/expenses")

        assert response.status_code == 200
        assert [d["id"] for d in response.json()] == [segunda, primera]

    def test_obtener_id_invalido_y_no_encontrado(self, client):
        assert client.get("/expenses/xyz").status_code == 400
        assert client.get("/expenses/999").status_code == 404

    def test_actualizar(self, client):
        despesa_id = _crear_despesa(client, description="antes")

        response = client.put(f"/expenses/{despesa_id}", json={"_id": "x", "description": "depois"})

        assert response.status_code == 200
        assert client.get(f"/expenses/{despesa_id}").json()["description"] == "depois"

    def test_actualizar_motivo_que_no_es_texto(self, client):
        despesa_id = _crear_despesa(client, description="x")

        response = client.put(f"/expenses/{despesa_id}", json={"rejection_reason": {"motivo": "x"}})

        assert response.status_code == 400
        assert "rejection_reason" in response.json()["detail"]

    def test_actualizar_no_encontrada(self, client):
        assert client.put("/expenses/999", json={"description": "x"}).status_code == 404

    def test_eliminar(self, client):
        despesa_id = _crear_despesa(client, description="borrar")

        assert client.delete(f"/expenses/{despesa_id}").status_code == 200
        assert client.get(f"/expenses/{despesa_id}").status_code == 404
        assert client.delete(f"/expenses/{despesa_id}").status_code == 404


class TestStatus:

    def test_escenario_aprobacion(self, client):
        despesa_id = _crear_despesa(client, amount=100)
        assert client.get(f"/expenses/{despesa_id}").json()["status"] == "pendente"

        response = client.put(f"/expenses/{despesa_id}/status", json={"status": "aprovado", "valor_aprovado": 80})

        assert response.status_code == 200
        data = client.get(f"/expenses/{despesa_id}").json()
        assert data["status"] == "aprovado"
        assert data["valor_aprovado"] == 80
        assert client.get(f"/expenses/{despesa_id}/receipt").status_code == 404

    def test_status_invalido(self, client):
        despesa_id = _crear_despesa(client, amount=100)

        response = client.put(f"/expenses/{despesa_id}/status", json={"status": "cancelado"})

        assert response.status_code == 400
        assert client.get(f"/expenses/{despesa_id}").json()["status"] == "pendente"

    def test_reprovar_y_conservar_motivo(self, client):
        despesa_id = _crear_despesa(client, amount=100)
        client.put(f"/expenses/{despesa_id}/status", json={
            "status": "reprovado", "rejection_reason": "Fora da política",
        })

        response = client.put(f"/expenses/{despesa_id}/status", json={
            "status": "parcial", "valor_aprovado": 40, "approval_notes": "Só o táxi",
        })

        expense = response.json()["expense"]
        assert expense["status"] == "parcial"
        assert expense["valor_aprovado"] == 40
        assert expense["approval_notes"] == "Só o táxi"
        assert expense["rejection_reason"] == "Fora da política"

    def test_status_de_despesa_inexistente(self, client):
        assert client.put("/expenses/999/status", json={"status": "aprovado"}).status_code == 404


class TestPendentes:

    @pytest.fixture
    def ids(self, client, funcionario, otro_funcionario):
        propia = _crear_despesa(client, userId=funcionario.id, description="propia")
        ajena = _crear_despesa(client, userId=otro_funcionario.id, description="ajena")
        aprobada = _crear_despesa(client, userId=funcionario.id, description="aprobada")
        client.put(f"/expenses/{aprobada}/status", json={"status": "aprovado", "valor_aprovado": 5})
        return propia, ajena

    def test_funcionario(self, client, funcionario, ids):
        propia, _ = ids

        response = client.get("/expenses/pendentes", params={"role": "funcionario", "userId": funcionario.id})

        assert response.status_code == 200
        assert [d["id"] for d in response.json()] == [propia]

    def test_socio(self, client, funcionario, ids):
        response = client.get("/expenses/pendentes", params={"role": "socio", "userId": funcionario.id})

        assert response.status_code == 200
        assert {d["id"] for d in response.json()} == set(ids)

    def test_sin_role(self, client, ids):
        assert client.get("/expenses/pendentes").status_code == 400
        assert client.get("/expenses/pendentes", params={"role": "diretor"}).status_code == 400


class TestComprovante:

    def test_subir_y_descargar(self, client):
        despesa_id = _crear_despesa(client, amount=30)
        contenido = b"\x89PNG\r\n\x1a\nimagen"

        response = client.post(
            f"/expenses/{despesa_id}/receipt",
            files={"receipt": ("nota.png", contenido, "image/png")},
        )
        assert response.status_code == 200

        descarga = client.get(f"/expenses/{despesa_id}/receipt")
        assert descarga.status_code == 200
        assert descarga.content == contenido
        assert descarga.headers["content-type"] == "image/png"

        data = client.get(f"/expenses/{despesa_id}").json()
        assert data["receipt"] == {"filename": "nota.png", "contentType": "image/png"}

    def test_sin_archivo(self, client):
        despesa_id = _crear_despesa(client, amount=30)
        assert client.post(f"/expenses/{despesa_id}/receipt").status_code == 400

    def test_despesa_inexistente(self, client):
        response = client.post("/expenses/999/receipt", files={"receipt": ("a.png", b"x", "image/png")})
        assert response.status_code == 404
