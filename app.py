"""
Flask веб-приложение для просмотра структуры PNG файлов
и генерации тестового изображения с диагоналями
"""

from flask import Flask, request, jsonify, send_file, render_template
import io
import base64
import traceback
from colour_type import ColourType
from png_image import PNGImage, FormatError, PNG_SIGNATURE

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = 16 * 1024 * 1024  # 16MB максимум

MAX_DIMENSION = 4096
DEFAULT_DIMENSION = 101


def draw_diagonals(width: int, height: int) -> PNGImage:
    """Рисует две чёрные диагонали на белом 1-битном изображении"""
    image = PNGImage.new(width, height, 1, ColourType.GRAYSCALE)
    for index in range(min(width, height)):
        image.put_pixel(0, index, index)
        image.put_pixel(0, width - 1 - index, index)
    return image


def read_dimensions():
    """Читает ширину и высоту из формы, возвращает (width, height, error)"""
    try:
        width = int(request.form.get('width', DEFAULT_DIMENSION))
        height = int(request.form.get('height', DEFAULT_DIMENSION))
    except ValueError:
        return None, None, 'Размеры должны быть целыми числами'
    if not (1 <= width <= MAX_DIMENSION and 1 <= height <= MAX_DIMENSION):
        return None, None, f'Размеры должны быть от 1 до {MAX_DIMENSION}'
    return width, height, None


@app.route('/')
def index():
    """Главная страница"""
    return render_template('index.html')


@app.route('/api/info', methods=['POST'])
def get_png_info():
    """Возвращает заголовок и список chunk загруженного PNG"""
    if 'file' not in request.files:
        return jsonify({'error': 'Файл не загружен'}), 400

    file = request.files['file']
    if file.filename == '':
        return jsonify({'error': 'Файл не выбран'}), 400

    data = file.read()

    try:
        image = PNGImage.from_bytes(data)
    except FormatError as e:
        return jsonify({'error': f'Неверный PNG: {str(e)}'}), 400
    except Exception as e:
        print("Ошибка парсинга PNG:")
        print(traceback.format_exc())
        return jsonify({'error': f'Ошибка парсинга: {str(e)}'}), 500

    colour_type = image.colour_type
    return jsonify({
        'width': image.width,
        'height': image.height,
        'bit_depth': image.bit_depth,
        'colour_type': colour_type.name if colour_type else image.colour_code,
        'signature_ok': data[:len(PNG_SIGNATURE)] == PNG_SIGNATURE,
        'chunks': [
            {
                'type': chunk.name,
                'length': chunk.length,
                'crc_ok': chunk.verify_crc()
            }
            for chunk in image.chunks
        ]
    })


@app.route('/api/diagonals', methods=['POST'])
def render_diagonals():
    """Отдаёт PNG с диагоналями как файл"""
    width, height, error = read_dimensions()
    if error:
        return jsonify({'error': error}), 400

    try:
        png_data = draw_diagonals(width, height).to_bytes()
    except Exception as e:
        print("Ошибка генерации изображения:")
        print(traceback.format_exc())
        return jsonify({'error': f'Ошибка обработки: {str(e)}'}), 500

    return send_file(
        io.BytesIO(png_data),
        mimetype='image/png',
        as_attachment=True,
        download_name=f'diagonals_{width}x{height}.png'
    )


@app.route('/api/preview', methods=['POST'])
def preview_diagonals():
    """Возвращает PNG с диагоналями в base64"""
    width, height, error = read_dimensions()
    if error:
        return jsonify({'error': error}), 400

    try:
        png_data = draw_diagonals(width, height).to_bytes()
    except Exception as e:
        print("Ошибка генерации превью:")
        print(traceback.format_exc())
        return jsonify({'error': f'Ошибка обработки: {str(e)}'}), 500

    image_base64 = base64.b64encode(png_data).decode('utf-8')
    return jsonify({
        'image': f'data:image/png;base64,{image_base64}',
        'width': width,
        'height': height
    })


if __name__ == '__main__':
    # Для Docker используем 0.0.0.0, чтобы принимать подключения извне
    app.run(debug=True, host='0.0.0.0', port=5000)
