"""
Тесты для app.py (Flask приложение)
"""
import pytest
import io
import base64
from app import app, draw_diagonals
from colour_type import ColourType
from png_chunk import Chunk
from png_image import PNGImage, PNG_SIGNATURE


@pytest.fixture
def client():
    """Фикстура для тестового клиента Flask"""
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


def upload(client, data, filename='test.png'):
    return client.post('/api/info', data={'file': (io.BytesIO(data), filename)},
                       content_type='multipart/form-data')


class TestDrawDiagonals:
    """Тесты генерации изображения с диагоналями"""

    def test_draw_diagonals(self):
        """Тест что обе диагонали чёрные, остальное белое"""
        image = draw_diagonals(5, 5)
        for index in range(5):
            assert image.get_pixel(index, index) == 0
            assert image.get_pixel(4 - index, index) == 0
        assert image.get_pixel(1, 0) == 1
        assert image.get_pixel(0, 2) == 1

    def test_draw_diagonals_wide(self):
        """Тест неквадратного изображения"""
        image = draw_diagonals(20, 3)
        assert image.get_pixel(2, 2) == 0
        assert image.get_pixel(17, 2) == 0
        assert image.get_pixel(10, 1) == 1


class TestApp:
    """Тесты для Flask приложения"""

    def test_index_page(self, client):
        """Тест главной страницы"""
        response = client.get('/')
        assert response.status_code == 200
        assert b'<html' in response.data or b'<!DOCTYPE' in response.data
        assert b'/api/info' in response.data
        assert b'/api/diagonals' in response.data

    def test_info_endpoint_no_file(self, client):
        """Тест /api/info без файла"""
        response = client.post('/api/info')
        assert response.status_code == 400
        data = response.get_json()
        assert 'error' in data

    def test_info_endpoint_empty_filename(self, client):
        """Тест /api/info с пустым именем файла"""
        response = upload(client, b'', filename='')
        assert response.status_code == 400

    def test_info_endpoint(self, client):
        """Тест /api/info с корректным PNG"""
        image = PNGImage.new(12, 7, 1, ColourType.GRAYSCALE)
        image.chunks.append(Chunk.from_data(b'tEXt', b'Title\x00test'))
        response = upload(client, image.to_bytes())

        assert response.status_code == 200
        data = response.get_json()
        assert data['width'] == 12
        assert data['height'] == 7
        assert data['bit_depth'] == 1
        assert data['colour_type'] == 'GRAYSCALE'
        assert data['signature_ok'] is True
        assert data['chunks'][0] == {'type': 'tEXt', 'length': 10, 'crc_ok': True}
        assert all(chunk['type'] == 'IDAT' for chunk in data['chunks'][1:])

    def test_info_endpoint_bad_ihdr(self, client):
        """Тест /api/info с файлом без IHDR"""
        data = PNG_SIGNATURE + Chunk.from_data(b'tEXt', b'x').to_bytes()
        response = upload(client, data)
        assert response.status_code == 400
        assert 'IHDR' in response.get_json()['error']

    def test_info_endpoint_truncated(self, client):
        """Тест /api/info с обрезанным файлом"""
        data = draw_diagonals(10, 10).to_bytes()[:20]
        response = upload(client, data)
        assert response.status_code == 500
        assert 'error' in response.get_json()

    def test_diagonals_endpoint(self, client):
        """Тест /api/diagonals"""
        response = client.post('/api/diagonals', data={'width': 30, 'height': 20})
        assert response.status_code == 200
        assert response.mimetype == 'image/png'
        assert response.data[:8] == PNG_SIGNATURE

        loaded = PNGImage.from_bytes(response.data)
        assert (loaded.width, loaded.height) == (30, 20)
        assert loaded.decompress_idat() == draw_diagonals(30, 20).prepare_image_data()

    def test_diagonals_endpoint_defaults(self, client):
        """Тест /api/diagonals без параметров"""
        response = client.post('/api/diagonals')
        assert response.status_code == 200
        loaded = PNGImage.from_bytes(response.data)
        assert (loaded.width, loaded.height) == (101, 101)

    def test_diagonals_endpoint_invalid_size(self, client):
        """Тест /api/diagonals с неверными размерами"""
        response = client.post('/api/diagonals', data={'width': 0, 'height': 10})
        assert response.status_code == 400

        response = client.post('/api/diagonals', data={'width': 'abc', 'height': 10})
        assert response.status_code == 400

        response = client.post('/api/diagonals', data={'width': 10, 'height': 100000})
        assert response.status_code == 400

    def test_preview_endpoint(self, client):
        """Тест /api/preview"""
        response = client.post('/api/preview', data={'width': 8, 'height': 8})
        assert response.status_code == 200
        data = response.get_json()
        prefix = 'data:image/png;base64,'
        assert data['image'].startswith(prefix)
        png_data = base64.b64decode(data['image'][len(prefix):])
        assert png_data == draw_diagonals(8, 8).to_bytes()

    def test_preview_endpoint_invalid_size(self, client):
        """Тест /api/preview с неверными размерами"""
        response = client.post('/api/preview', data={'width': -1})
        assert response.status_code == 400

    def test_404_page(self, client):
        """Тест несуществующей страницы"""
        response = client.get('/nonexistent')
        assert response.status_code == 404
